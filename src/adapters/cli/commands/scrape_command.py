"""
Commande CLI scrape : scraping de toute la bibliotheque.

Les codes deja en cache sont ignores (sauf --force), puis les acteurs des
films sont traites si le scraping d'acteurs est active.
"""

from typing import Annotated

import typer
from dependency_injector import providers
from rich.markup import escape

from src.adapters.cli.helpers import (
    ProgressRenderer,
    console,
    print_summary,
    run_async,
    suppress_loguru,
    with_container,
)
from src.adapters.confirmation import ConsoleConfirmChannel


def scrape(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Re-scrape aussi les codes deja en cache"),
    ] = False,
    no_actors: Annotated[
        bool,
        typer.Option("--no-actors", help="Ne pas traiter les acteurs apres les films"),
    ] = False,
    interactive: Annotated[
        bool,
        typer.Option(
            "--interactive", "-i",
            help="Demander confirmation quand une source echoue",
        ),
    ] = False,
) -> None:
    """Scrape les films de la bibliotheque puis leurs acteurs."""
    run_async(_scrape_async(force, no_actors, interactive))


@with_container()
async def _scrape_async(container, force: bool, no_actors: bool, interactive: bool) -> None:
    """Implementation async de la commande scrape."""
    if interactive:
        container.confirmation.override(
            providers.Singleton(ConsoleConfirmChannel, console=console)
        )

    driver = container.batch_driver()
    with_actors = False if no_actors else None

    with suppress_loguru():
        with ProgressRenderer("Scraping de la bibliotheque", live=not interactive) as progress:
            report = await driver.scrape_library(
                force=force, with_actors=with_actors, on_progress=progress
            )

    print_summary("Films", report.movies.to_dict())
    if report.actors is not None:
        print_summary("Acteurs", report.actors.scraping.to_dict())
        print_summary("Films mis a jour", report.actors.updating.to_dict())
    if report.actor_error:
        console.print(
            f"[yellow]Traitement des acteurs en echec:[/yellow] {escape(report.actor_error)}"
        )
