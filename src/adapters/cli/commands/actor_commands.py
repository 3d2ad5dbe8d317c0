"""
Commandes CLI du cache acteurs (batch, get, list, save, delete, maintenance).
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from src.adapters.cli.helpers import (
    ProgressRenderer,
    console,
    open_container,
    print_summary,
    run_async,
    suppress_loguru,
    with_container,
)
from src.core.entities.actor import ActorRecord


actors_app = typer.Typer(
    name="actors",
    help="Commandes du cache acteurs",
    rich_markup_mode="rich",
)


def _print_actor(actor: ActorRecord) -> None:
    table = Table(title=escape(actor.name or actor.id), show_header=False)
    table.add_column("Champ", style="cyan")
    table.add_column("Valeur")
    table.add_row("ID", actor.id)
    table.add_row("Nom alternatif", actor.alt_name or "-")
    table.add_row("Autres noms", ", ".join(actor.other_names) or "-")
    table.add_row("Naissance", actor.birthdate or "-")
    for label, value in (
        ("Taille", actor.height),
        ("Poitrine", actor.bust),
        ("Taille (tour)", actor.waist),
        ("Hanches", actor.hips),
    ):
        table.add_row(label, f"{value} cm" if value else "-")
    table.add_row("Photo", actor.thumb or "-")
    table.add_row("Sources", ", ".join(actor.meta.sources) or "-")
    table.add_row("Mise a jour", actor.meta.last_update or "-")
    console.print(table)


@actors_app.command("batch")
def actors_batch() -> None:
    """Complete les fiches des acteurs references par les films puis met a jour les films."""
    run_async(_actors_batch_async())


@with_container()
async def _actors_batch_async(container) -> None:
    driver = container.batch_driver()
    with suppress_loguru():
        with ProgressRenderer("Traitement des acteurs") as progress:
            summary = await driver.process_actors(on_progress=progress)
    print_summary("Acteurs", summary.scraping.to_dict())
    print_summary("Films mis a jour", summary.updating.to_dict())


@actors_app.command("get")
def actors_get(
    name: Annotated[str, typer.Argument(help="Nom de l'acteur")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Re-scrape meme si la fiche est complete"),
    ] = False,
) -> None:
    """Affiche la fiche d'un acteur (scrapee si absente ou incomplete)."""
    run_async(_actors_get_async(name, force))


@with_container()
async def _actors_get_async(container, name: str, force: bool) -> None:
    coordinator = container.actor_coordinator()
    with suppress_loguru():
        with ProgressRenderer(f"Recherche de {name}") as progress:
            lookup = await coordinator.get_actor(name, force=force, on_progress=progress)

    if lookup.actor is None:
        console.print(f"[yellow]Acteur introuvable: {escape(name)}[/yellow]")
        raise typer.Exit(code=1)
    if lookup.from_cache:
        console.print("[dim]Fiche lue depuis le cache[/dim]")
    _print_actor(lookup.actor)


@actors_app.command("list")
def actors_list() -> None:
    """Liste les fiches du cache, triees par nom."""
    container = open_container()
    actors = container.actor_coordinator().list_actors()
    if not actors:
        console.print("[yellow]Aucune fiche acteur en cache.[/yellow]")
        return

    table = Table(title=f"{len(actors)} acteur(s)")
    table.add_column("ID", style="cyan")
    table.add_column("Nom")
    table.add_column("Nom alternatif")
    table.add_column("Naissance")
    table.add_column("Taille", justify="right")
    table.add_column("Sources", style="dim")
    for actor in actors:
        table.add_row(
            actor.id,
            escape(actor.name),
            escape(actor.alt_name),
            actor.birthdate,
            str(actor.height or ""),
            ", ".join(actor.meta.sources),
        )
    console.print(table)


@actors_app.command("save")
def actors_save(
    file: Annotated[
        Path,
        typer.Argument(help="Fichier JSON de la fiche (cles camelCase)", exists=True, dir_okay=False),
    ],
) -> None:
    """Enregistre une fiche editee a la main."""
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Fichier illisible:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    if not isinstance(data, dict) or not data.get("name"):
        console.print("[red]La fiche doit etre un objet JSON avec un champ name.[/red]")
        raise typer.Exit(code=1)

    container = open_container()
    actor = ActorRecord.from_dict(data)
    if not container.actor_coordinator().save_actor(actor):
        console.print(f"[red]Ecriture de la fiche {escape(actor.id)} impossible.[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Fiche sauvegardee:[/green] {escape(actor.id)}")


@actors_app.command("delete")
def actors_delete(
    actor_id: Annotated[str, typer.Argument(help="ID (slug) de la fiche")],
) -> None:
    """Supprime une fiche, ses photos et ses entrees d'index."""
    container = open_container()
    if container.actor_coordinator().delete_actor(actor_id):
        console.print(f"[green]Fiche supprimee:[/green] {escape(actor_id)}")
    else:
        console.print(f"[yellow]Aucune fiche {escape(actor_id)}[/yellow]")


@actors_app.command("rebuild-index")
def actors_rebuild_index() -> None:
    """Reconstruit l'index des noms depuis les fiches .nfo."""
    container = open_container(ensure_index=False)
    stats = container.name_index().rebuild()
    console.print("[bold]Index reconstruit:[/bold]")
    console.print(f"  [green]{stats.processed}[/green] fiche(s) lue(s)")
    if stats.failed:
        console.print(f"  [red]{stats.failed}[/red] fiche(s) illisible(s)")
    console.print(f"  {stats.total_entries} entree(s) pour {stats.unique_actors} acteur(s)")


@actors_app.command("update-thumbs")
def actors_update_thumbs() -> None:
    """Reecrit les acteurs des films depuis les fiches a jour."""
    container = open_container()
    with suppress_loguru():
        with ProgressRenderer("Mise a jour des films") as progress:
            summary = container.batch_driver().reconcile_movie_actors(on_progress=progress)
    print_summary("Films mis a jour", summary.to_dict())

