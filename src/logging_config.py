"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console (stderr) : coloree, son niveau suit les options -v / -q
- fichier : JSON avec rotation, toujours en DEBUG (stderr des sources et
  requetes HTTP inclus)
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> "
    "<level>{level: <8}</level> "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Handler console courant (None tant que configure_logging n'a pas ete appele)
_console_handler_id: Optional[int] = None


def verbosity_level(verbose: int, quiet: bool, default: str = "INFO") -> str:
    """Niveau console a partir des options de la ligne de commande."""
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "TRACE"
    if verbose == 1:
        return "DEBUG"
    return default


def _add_console(level: str) -> int:
    return logger.add(sys.stderr, level=level, format=_CONSOLE_FORMAT, colorize=True)


def set_console_level(level: str) -> None:
    """
    Remplace le handler console par un handler au niveau demande.

    Sans configuration prealable (tests, usage en librairie), ne fait rien.
    """
    global _console_handler_id
    if _console_handler_id is None:
        return
    logger.remove(_console_handler_id)
    _console_handler_id = _add_console(level)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/mediascrape.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Installe les handlers console et fichier.

    Args :
        log_level : Niveau console par defaut (surcharge par -v / -q)
        log_file : Fichier de log JSON
        rotation_size : Taille declenchant la rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conserves
    """
    global _console_handler_id
    logger.remove()
    _console_handler_id = _add_console(log_level)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(f"Logs ecrits dans {log_file} (rotation {rotation_size})")
