"""
Normalisation des reponses brutes des sources en SourceResult.

Les scrapers renvoient tantot un tableau, tantot un objet, parfois un
enregistrement {code, error} pour signaler une absence. Tout est ramene
ici a FOUND / NOT_FOUND / FAILED pour que le coordinateur n'ait jamais a
deviner la forme du resultat.
"""

import json
from typing import Any

from src.core.value_objects.source_result import SourceResult
from src.utils.helpers import is_empty_value

# Enveloppes tolerees autour du resultat utile
_WRAPPER_KEYS = ("results", "data")
_ACTOR_IGNORED_KEYS = frozenset({"id", "meta", "error"})
_MOVIE_IGNORED_KEYS = frozenset({"code", "dvd_id", "id", "error"})


def decode_json(text: str) -> tuple[bool, Any]:
    """Decode un document JSON. Retourne (succes, valeur)."""
    if not text or not text.strip():
        return True, None
    try:
        return True, json.loads(text)
    except json.JSONDecodeError:
        return False, None


def _unwrap(payload: Any) -> Any:
    if isinstance(payload, dict):
        for key in _WRAPPER_KEYS:
            if key in payload and isinstance(payload[key], (list, dict)):
                return payload[key]
    return payload


def _has_data(item: dict[str, Any], ignored: frozenset[str]) -> bool:
    return any(
        not is_empty_value(value) for key, value in item.items() if key not in ignored
    )


def movie_items(payload: Any) -> list[dict[str, Any]]:
    """
    Enregistrements de films exploitables d'une reponse.

    Un enregistrement doit porter code ou dvd_id ; ceux qui ne portent
    qu'une erreur ou aucune donnee sont ignores.
    """
    payload = _unwrap(payload)
    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list):
        return []

    items = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        if not (item.get("code") or item.get("dvd_id")):
            continue
        if item.get("error") and not _has_data(item, _MOVIE_IGNORED_KEYS):
            continue
        if _has_data(item, _MOVIE_IGNORED_KEYS):
            items.append(item)
    return items


def movie_result(payload: Any) -> SourceResult:
    """SourceResult d'une reponse de source de films deja decodee."""
    items = movie_items(payload)
    if not items:
        return SourceResult.not_found()
    return SourceResult.found(items)


def actor_result(payload: Any) -> SourceResult:
    """
    SourceResult d'une reponse de source d'acteurs deja decodee.

    Un tableau est accepte (premier objet exploitable). Un objet portant
    une cle error est une absence.
    """
    payload = _unwrap(payload)
    if isinstance(payload, list):
        candidates = [p for p in payload if isinstance(p, dict)]
    elif isinstance(payload, dict):
        candidates = [payload]
    else:
        candidates = []

    for candidate in candidates:
        if candidate.get("error"):
            continue
        if _has_data(candidate, _ACTOR_IGNORED_KEYS):
            return SourceResult.found(candidate)
    return SourceResult.not_found()
