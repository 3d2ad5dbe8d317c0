"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.scrape_command import scrape
from src.adapters.cli.commands.actor_commands import (
    actors_app,
    actors_batch,
    actors_delete,
    actors_get,
    actors_list,
    actors_rebuild_index,
    actors_save,
    actors_update_thumbs,
)
from src.adapters.cli.commands.movie_commands import (
    movies_app,
    movies_delete,
    movies_list,
    movies_patch,
    movies_show,
    parse_assignments,
)

__all__ = [
    "scrape",
    # Acteurs
    "actors_app",
    "actors_batch",
    "actors_delete",
    "actors_get",
    "actors_list",
    "actors_rebuild_index",
    "actors_save",
    "actors_update_thumbs",
    # Films
    "movies_app",
    "movies_delete",
    "movies_list",
    "movies_patch",
    "movies_show",
    "parse_assignments",
]
