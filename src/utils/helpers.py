"""
Fonctions utilitaires partagees dans le projet MediaScrape.

Ce module centralise les fonctions reutilisees a travers le codebase :
- is_empty_value : predicat "champ vide" commun aux fusions
- utc_now_iso : horodatage ISO-8601
- write_text_atomic : remplacement complet d'un fichier (jamais de fichier a moitie ecrit)
- extract_code_from_filename : code d'un film depuis son nom de fichier
"""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def is_empty_value(value: Any) -> bool:
    """
    Indique si une valeur de champ est vide.

    Sont vides : None, chaine vide ou blanche, zero numerique, liste vide,
    dictionnaire vide ou dont toutes les valeurs sont vides. Les booleens
    ne sont jamais consideres comme vides.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    if isinstance(value, dict):
        return all(is_empty_value(v) for v in value.values())
    return False


def utc_now_iso() -> str:
    """Horodatage courant ISO-8601 en UTC (suffixe Z)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def write_text_atomic(path: Path, content: str) -> None:
    """
    Ecrit un fichier par remplacement complet.

    Le contenu est ecrit dans un fichier temporaire du meme repertoire puis
    renomme sur la cible : un lecteur voit soit l'ancien, soit le nouveau
    contenu.

    Raises:
        OSError: Si l'ecriture ou le renommage echoue
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def extract_code_from_filename(filename: str) -> str:
    """
    Extrait le code d'un film depuis un nom de fichier.

    Le code est la partie avant le premier espace, extension retiree.

    Examples:
        >>> extract_code_from_filename("SDDM-943 Some Title.mp4")
        'SDDM-943'
        >>> extract_code_from_filename("ABP-123.mkv")
        'ABP-123'
    """
    head = filename.split(" ", 1)[0]
    stem, dot, _ext = head.rpartition(".")
    return stem if dot and stem else head
