"""
Lecture de la bibliotheque video : codes des films a scraper.

Le scan n'est pas recursif ; le code d'un film est la partie du nom de
fichier avant le premier espace, extension retiree.
"""

from pathlib import Path
from typing import Optional

from src.core.exceptions import ConfigError
from src.utils.constants import VIDEO_EXTENSIONS
from src.utils.helpers import extract_code_from_filename


def _video_files(library_path: Path) -> list[Path]:
    return sorted(
        entry
        for entry in library_path.iterdir()
        if entry.is_file()
        and not entry.name.startswith(".")
        and entry.suffix.lower() in VIDEO_EXTENSIONS
    )


def extract_codes_from_library(library_path: Path) -> list[str]:
    """
    Codes distincts des fichiers video du repertoire, dans l'ordre des noms.

    Raises:
        ConfigError: Si le repertoire n'existe pas
    """
    if not library_path.is_dir():
        raise ConfigError(f"Bibliotheque introuvable: {library_path}")

    codes: list[str] = []
    for video in _video_files(library_path):
        code = extract_code_from_filename(video.name)
        if code and code not in codes:
            codes.append(code)
    return codes


def find_video_file(library_path: Optional[Path], code: str) -> str:
    """Chemin du fichier video correspondant au code (insensible a la casse), vide sinon."""
    if library_path is None or not library_path.is_dir():
        return ""
    wanted = code.lower()
    for video in _video_files(library_path):
        if extract_code_from_filename(video.name).lower() == wanted:
            return str(video)
    return ""
