"""
Commandes CLI du cache films (list, show, patch, delete).
"""

import json
from typing import Annotated, Any, Optional

import typer
from rich.markup import escape
from rich.table import Table

from src.adapters.cli.helpers import console, open_container


movies_app = typer.Typer(
    name="movies",
    help="Commandes du cache films",
    rich_markup_mode="rich",
)


def parse_assignments(assignments: list[str]) -> dict[str, Any]:
    """
    Convertit des arguments FIELD=VALUE en dictionnaire.

    La valeur est lue comme du JSON quand c'est possible (nombres, listes,
    objets), sinon comme une chaine.

    Raises:
        typer.BadParameter: Si un argument n'a pas la forme FIELD=VALUE
    """
    changes: dict[str, Any] = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Attendu FIELD=VALUE, recu: {assignment}")
        try:
            changes[key] = json.loads(raw)
        except json.JSONDecodeError:
            changes[key] = raw
    return changes


@movies_app.command("list")
def movies_list() -> None:
    """Liste les films en cache."""
    cache = open_container(ensure_index=False).movie_cache()
    envelopes = list(cache.iter_envelopes())
    if not envelopes:
        console.print("[yellow]Aucun film en cache.[/yellow]")
        return

    table = Table(title=f"{len(envelopes)} film(s)")
    table.add_column("Code", style="cyan")
    table.add_column("Titre")
    table.add_column("Sortie")
    table.add_column("Acteurs", justify="right")
    table.add_column("Sources", style="dim")
    for envelope in envelopes:
        movie = envelope.data
        table.add_row(
            movie.code,
            escape(movie.title),
            movie.release_date,
            str(len(movie.actor)),
            ", ".join(envelope.sources) or "[red]aucune[/red]",
        )
    console.print(table)


@movies_app.command("show")
def movies_show(
    code: Annotated[str, typer.Argument(help="Code du film")],
) -> None:
    """Affiche l'enveloppe JSON d'un film."""
    envelope = open_container(ensure_index=False).movie_cache().load(code)
    if envelope is None:
        console.print(f"[yellow]Film absent du cache: {escape(code)}[/yellow]")
        raise typer.Exit(code=1)
    console.print_json(data=envelope.to_dict())


@movies_app.command("patch")
def movies_patch(
    code: Annotated[str, typer.Argument(help="Code du film")],
    assignments: Annotated[
        list[str],
        typer.Argument(help="Modifications FIELD=VALUE (cles camelCase, valeurs JSON ou texte)"),
    ],
) -> None:
    """Modifie des champs d'un film en cache."""
    changes = parse_assignments(assignments)
    envelope = open_container(ensure_index=False).movie_cache().patch(code, changes)
    if envelope is None:
        console.print(f"[red]Modification impossible pour {escape(code)}[/red]")
        raise typer.Exit(code=1)
    fields = ", ".join(sorted(changes))
    console.print(f"[green]Film mis a jour:[/green] {escape(code)} ({escape(fields)})")


@movies_app.command("delete")
def movies_delete(
    code: Annotated[Optional[str], typer.Argument(help="Code du film")] = None,
    delete_all: Annotated[
        bool,
        typer.Option("--all", help="Vider tout le cache films"),
    ] = False,
) -> None:
    """Supprime un film du cache, ou tout le cache avec --all."""
    if not delete_all and not code:
        console.print("[red]Indiquer un code ou --all.[/red]")
        raise typer.Exit(code=1)

    cache = open_container(ensure_index=False).movie_cache()
    if delete_all:
        if not typer.confirm("Supprimer tous les films du cache ?", default=False):
            console.print("[dim]Annule.[/dim]")
            return
        deleted = cache.delete_all()
        console.print(f"[green]{deleted} film(s) supprime(s)[/green]")
        return

    if cache.delete(code):
        console.print(f"[green]Film supprime:[/green] {escape(code)}")
    else:
        console.print(f"[yellow]Film absent du cache: {escape(code)}[/yellow]")
