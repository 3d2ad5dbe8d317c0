"""
Evenements de progression emis par les coordinateurs et le batch.

Les coordinateurs ne connaissent pas le transport (console Rich, WebSocket...) :
ils appellent simplement le callback on_progress avec un ProgressEvent.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class ProgressKind(Enum):
    """Type d'evenement de progression."""

    START = "start"
    PROGRESS = "progress"
    SOURCE_ERROR = "source_error"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ProgressEvent:
    """
    Evenement de progression.

    Attributs:
        kind: Type d'evenement
        message: Message lisible
        current: Position de l'element courant dans le batch (1-indexe)
        total: Nombre total d'elements du batch
        source: Nom de la source concernee
    """

    kind: ProgressKind
    message: str
    current: int = 0
    total: int = 0
    source: Optional[str] = None


ProgressCallback = Callable[[ProgressEvent], None]


def emit(
    callback: Optional[ProgressCallback],
    message: str,
    kind: ProgressKind = ProgressKind.PROGRESS,
    **kwargs,
) -> None:
    """Emet un evenement si un callback est fourni."""
    if callback is not None:
        callback(ProgressEvent(kind=kind, message=message, **kwargs))
