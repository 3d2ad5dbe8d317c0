"""
Fusion des resultats partiels de plusieurs sources.

Deux politiques distinctes, a ne pas confondre :
- priorite des sources (premier scraping, aucune fiche de reference) :
  chaque champ vient de la premiere source de l'ordre configure qui
  fournit une valeur non vide (merge_actor_results, merge_movie_results)
- priorite locale (reconciliation avec une fiche deja en cache ou editee
  par l'utilisateur) : la valeur locale non vide l'emporte toujours
  (merge_local_with_scraped)

Le module regroupe aussi les regles de completude et de resolution du
thumb utilisees par le cache et les coordinateurs.
"""

from typing import Any, Callable, Iterable, Optional

from src.core.entities.actor import ACTOR_DATA_FIELDS, ActorMeta, ActorRecord
from src.utils.constants import (
    ACTOR_REQUIRED_FIELDS,
    LOCAL_THUMB_PREFIX,
    MOVIE_IDENTITY_FIELDS,
)
from src.utils.helpers import is_empty_value
from src.utils.slug import normalize_actor_name


# ============================================================================
# Regles sur les fiches acteurs
# ============================================================================


def is_actor_complete(actor: Optional[ActorRecord]) -> bool:
    """
    Indique si une fiche acteur est complete.

    Tous les champs de ACTOR_REQUIRED_FIELDS doivent etre renseignes (texte
    non vide, mesure strictement positive). Une seule mesure manquante rend
    la fiche incomplete et declenche un nouveau scraping au prochain acces.
    """
    if actor is None:
        return False
    for field_name in ACTOR_REQUIRED_FIELDS:
        value = getattr(actor, field_name)
        if isinstance(value, str):
            if not value.strip():
                return False
        elif isinstance(value, (int, float)):
            if value <= 0:
                return False
        elif value is None:
            return False
    return True


def resolve_actor_thumb(actor: ActorRecord) -> str:
    """
    Calcule la valeur d'affichage du thumb.

    Priorite : URL distante d'origine, thumb deja distant, photo locale
    (upload manuel ou fichier telecharge), sinon vide.
    """
    if actor.thumb_url.startswith("http"):
        return actor.thumb_url
    if actor.thumb.startswith("http"):
        return actor.thumb
    if actor.thumb.startswith(LOCAL_THUMB_PREFIX):
        return actor.thumb
    if actor.thumb_local:
        filename = actor.thumb_local.replace("\\", "/").rsplit("/", 1)[-1]
        return f"{LOCAL_THUMB_PREFIX}{filename}"
    return ""


def has_uploaded_thumb(actor: ActorRecord) -> bool:
    """True si la fiche porte une photo uploadee localement."""
    return actor.thumb.startswith(LOCAL_THUMB_PREFIX)


def _union(*name_lists: Iterable[str]) -> list[str]:
    """Union ordonnee, sans doublon ni valeur vide."""
    seen: set[str] = set()
    merged: list[str] = []
    for names in name_lists:
        for name in names:
            cleaned = name.strip() if isinstance(name, str) else ""
            if cleaned and cleaned not in seen:
                seen.add(cleaned)
                merged.append(cleaned)
    return merged


def _priority_rank(priority: list[str]) -> Callable[[str], int]:
    """Rang d'une source dans l'ordre configure (inconnues en dernier)."""
    ranks = {name: position for position, name in enumerate(priority)}
    return lambda source: ranks.get(source, len(priority))


# ============================================================================
# Politique "priorite des sources"
# ============================================================================


def merge_actor_results(
    actor_name: str,
    results: list[tuple[str, ActorRecord]],
    priority: list[str],
) -> ActorRecord:
    """
    Fusionne les fiches partielles de plusieurs sources (premier scraping).

    Pour chaque champ, la valeur retenue est celle de la premiere source de
    `priority` qui fournit une valeur non vide, quel que soit l'ordre de
    `results`. Les sources absentes de `priority` passent apres, dans leur
    ordre d'arrivee. otherNames est l'union de toutes les sources et
    meta.sources la liste ordonnee des sources ayant fourni au moins un champ.

    Args:
        actor_name: Nom demande (valeur par defaut du champ name)
        results: Couples (nom de source, fiche partielle)
        priority: Ordre de priorite des sources

    Returns:
        Fiche fusionnee dont l'ID est le slug du nom demande
    """
    rank = _priority_rank(priority)
    ordered = sorted(
        enumerate(results), key=lambda item: (rank(item[1][0]), item[0])
    )
    ordered_results = [pair for _, pair in ordered]

    merged = ActorRecord(id=normalize_actor_name(actor_name), name=actor_name)
    contributors: list[str] = []

    for field_name in ACTOR_DATA_FIELDS:
        if field_name == "other_names":
            continue
        for source_name, partial in ordered_results:
            value = getattr(partial, field_name)
            if not is_empty_value(value):
                setattr(merged, field_name, value)
                if source_name not in contributors:
                    contributors.append(source_name)
                break

    other_names: list[list[str]] = []
    for source_name, partial in ordered_results:
        if partial.other_names:
            other_names.append(partial.other_names)
            if source_name not in contributors:
                contributors.append(source_name)
    merged.other_names = _union(*other_names)

    # Provenance dans l'ordre de priorite
    merged.meta = ActorMeta(sources=sorted(contributors, key=rank))
    return merged


def merge_movie_results(
    code: str,
    results: list[tuple[str, dict[str, Any]]],
    field_priority: Callable[[str], list[str]],
) -> dict[str, Any]:
    """
    Fusionne les enregistrements partiels d'un film.

    Chaque champ (hors identifiants code/dvd_id/id/error) est pris dans la
    premiere source de field_priority(champ) qui fournit une valeur non
    vide. Les sources non citees dans la priorite du champ ne servent qu'a
    combler un champ reste vide.

    Args:
        code: Code du film
        results: Couples (nom de source, enregistrement partiel camelCase)
        field_priority: Ordre des sources pour un champ donne

    Returns:
        Dictionnaire fusionne (format d'echange), id et code egaux au code
    """
    merged: dict[str, Any] = {"code": code, "id": code}

    all_fields: list[str] = []
    for _, data in results:
        for field_name in data:
            if field_name not in MOVIE_IDENTITY_FIELDS and field_name not in all_fields:
                all_fields.append(field_name)

    for field_name in all_fields:
        priority = field_priority(field_name)
        rank = _priority_rank(priority)
        ordered = sorted(
            enumerate(results), key=lambda item: (rank(item[1][0]), item[0])
        )
        for _, (_, data) in ordered:
            value = data.get(field_name)
            if not is_empty_value(value):
                merged[field_name] = value
                break

    return merged


# ============================================================================
# Politique "priorite locale"
# ============================================================================


def merge_local_with_scraped(
    local: ActorRecord, scraped: Optional[ActorRecord]
) -> ActorRecord:
    """
    Reconcilie une fiche existante avec des donnees fraichement scrapees.

    La valeur locale non vide l'emporte toujours ; les champs locaux vides
    sont completes par le scraping. Les otherNames sont unis (locaux
    d'abord). Une photo uploadee manuellement est conservee telle quelle,
    y compris thumb_url et thumb_local.

    merge_local_with_scraped(local, None) et avec une fiche vide renvoient
    une copie egale a local.
    """
    merged = local.copy()
    if scraped is None:
        return merged

    keep_upload = has_uploaded_thumb(local)
    thumb_fields = ("thumb", "thumb_url", "thumb_local")

    for field_name in ACTOR_DATA_FIELDS:
        if field_name == "other_names":
            continue
        if keep_upload and field_name in thumb_fields:
            continue
        if is_empty_value(getattr(merged, field_name)):
            value = getattr(scraped, field_name)
            if not is_empty_value(value):
                setattr(merged, field_name, value)

    merged.other_names = _union(local.other_names, scraped.other_names)
    merged.meta.sources = _union(local.meta.sources, scraped.meta.sources)
    return merged


# ============================================================================
# Nettoyage
# ============================================================================


def remove_empty_fields(data: dict[str, Any]) -> dict[str, Any]:
    """
    Retire les cles dont la valeur est vide (recursivement pour les dicts).

    Utilise pour ne pas ecraser des donnees existantes avec des champs
    vides renvoyes par une source.
    """
    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = remove_empty_fields(value)
        if not is_empty_value(value):
            cleaned[key] = value
    return cleaned
