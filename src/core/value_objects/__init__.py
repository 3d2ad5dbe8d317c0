"""
Objets valeur immutables.

Exports :
- SourceResult, SourceStatus : Reponse normalisee d'une source (FOUND, NOT_FOUND, FAILED)
- FetchResult, FetchStatus : Resultat d'une requete de session
- ProgressEvent, ProgressKind : Evenements de progression des coordinateurs
"""

from src.core.value_objects.fetch import FetchResult, FetchStatus
from src.core.value_objects.progress import ProgressCallback, ProgressEvent, ProgressKind
from src.core.value_objects.source_result import SourceResult, SourceStatus

__all__ = [
    "FetchResult",
    "FetchStatus",
    "ProgressCallback",
    "ProgressEvent",
    "ProgressKind",
    "SourceResult",
    "SourceStatus",
]
