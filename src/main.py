"""
Point d'entree CLI de MediaScrape.

    mediascrape scrape [CODES...]     scrape des films (ou de la bibliotheque)
    mediascrape actors ...            fiches acteurs
    mediascrape movies ...            cache des films
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import actors_app, movies_app, scrape
from .container import Container
from .logging_config import configure_logging, set_console_level, verbosity_level

__version__ = "0.1.0"

app = typer.Typer(
    name="mediascrape",
    help="Scraping de metadonnees de films et d'acteurs",
)
container = Container()

app.command()(scrape)
app.add_typer(actors_app, name="actors")
app.add_typer(movies_app, name="movies")


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Logs detailles (-v: DEBUG, -vv: TRACE)"),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="N'afficher que les erreurs"),
    ] = False,
) -> None:
    """MediaScrape - Scraping de films et d'acteurs."""
    default = container.config().log_level
    set_console_level(verbosity_level(verbose, quiet, default=default))


@app.command()
def info() -> None:
    """Affiche les parametres effectifs."""
    settings = container.config()
    rows = [
        ("Configuration", settings.config_path),
        ("Donnees", settings.data_dir),
        ("Scrapers", settings.scrapers_dir),
        ("Timeout acteurs", f"{settings.actor_timeout_seconds:g}s"),
        ("Pause entre elements", f"{settings.item_delay_seconds:g}s"),
        ("Operations par session", settings.session_max_operations),
        ("Niveau de log", settings.log_level),
    ]
    for label, value in rows:
        typer.echo(f"{label} : {value}")


@app.command()
def version() -> None:
    """Affiche la version."""
    typer.echo(f"MediaScrape v{__version__}")


def main() -> None:
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    logger.info(f"MediaScrape v{__version__}")
    app()


if __name__ == "__main__":
    main()
