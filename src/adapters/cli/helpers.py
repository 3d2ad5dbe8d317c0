"""
Utilitaires partages pour les commandes CLI de MediaScrape.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- build_container / with_container : container initialise (index verifie)
- exit_on_error, run_async, open_container : erreurs traduites en code de sortie 1
- ProgressRenderer : affichage Rich des evenements de progression
- print_summary : affichage d'un bilan {total, scraped, cached, failed}
"""

import asyncio
from contextlib import contextmanager
from functools import wraps
from typing import Any, Coroutine, Optional

import typer
from loguru import logger as loguru_logger
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from src.container import Container
from src.core.exceptions import MediaScrapeError, ScrapingStoppedError
from src.core.value_objects.progress import ProgressEvent, ProgressKind

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("src")
    try:
        yield
    finally:
        loguru_logger.enable("src")


def build_container(ensure_index: bool = True) -> Container:
    """
    Cree un container et remet l'index des noms en coherence avec les fiches.

    Raises:
        ConfigError: Si config.json est illisible
    """
    container = Container()
    container.scrape_config()
    if ensure_index:
        container.name_index().ensure_consistent()
    return container


def with_container(ensure_index: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            driver = container.batch_driver()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = build_container(ensure_index)
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


@contextmanager
def exit_on_error():
    """
    Traduit les erreurs de l'application en code de sortie 1.

    Un arret demande par l'utilisateur ou une configuration invalide termine
    la commande ; les echecs de scraping sont seulement rapportes dans les
    bilans.
    """
    try:
        yield
    except ScrapingStoppedError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except MediaScrapeError as e:
        console.print(f"[red]Erreur:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


class ProgressRenderer:
    """
    Callback on_progress affichant une barre Rich.

    En mode interactif (live=False), les messages sont imprimes ligne par
    ligne pour ne pas interferer avec les questions posees a l'utilisateur.
    """

    def __init__(self, description: str, live: bool = True) -> None:
        self._description = description
        self._live = live
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def __enter__(self) -> "ProgressRenderer":
        if self._live:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
            )
            self._progress.start()
            self._task = self._progress.add_task(self._description, total=None)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def __call__(self, event: ProgressEvent) -> None:
        message = escape(event.message)
        if event.kind is ProgressKind.SOURCE_ERROR:
            self._print(f"[yellow]{message}[/yellow]")
            return
        if event.kind is ProgressKind.COMPLETE:
            self._print(f"[green]{message}[/green]")

        if self._progress is None or self._task is None:
            if event.kind is not ProgressKind.COMPLETE:
                console.print(f"[dim]{message}[/dim]")
            return

        update: dict[str, Any] = {"description": message}
        if event.total:
            update["total"] = event.total
        if event.current:
            update["completed"] = event.current
        self._progress.update(self._task, **update)

    def _print(self, text: str) -> None:
        if self._progress is not None:
            self._progress.console.print(text)
        else:
            console.print(text)


def print_summary(title: str, summary: dict[str, int]) -> None:
    """Affiche un bilan {total, scraped|updated, cached, failed}."""
    table = Table(title=title, show_header=True, header_style="bold")
    for key in summary:
        table.add_column(key, justify="right")
    styles = {"scraped": "green", "updated": "green", "cached": "cyan", "failed": "red"}
    table.add_row(
        *(
            f"[{styles[key]}]{value}[/{styles[key]}]" if key in styles and value else str(value)
            for key, value in summary.items()
        )
    )
    console.print(table)


def run_async(coro: Coroutine[Any, Any, Any]) -> Any:
    """Execute l'implementation async d'une commande."""
    with exit_on_error():
        return asyncio.run(coro)


def open_container(ensure_index: bool = True) -> Container:
    """Container pour les commandes synchrones."""
    with exit_on_error():
        return build_container(ensure_index)
