"""
Objet valeur representant la reponse normalisee d'une source.

Chaque adaptateur de source renvoie un SourceResult, quel que soit le format
brut de la source (tableau, objet, enveloppe optionnelle). Le coordinateur
n'a donc jamais a deviner la forme du resultat.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class SourceStatus(Enum):
    """Issue d'un appel a une source.

    Valeurs:
        FOUND: Donnees partielles disponibles
        NOT_FOUND: La source a repondu mais n'a rien pour cette requete
        FAILED: Erreur, timeout ou reponse illisible
    """

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceResult:
    """
    Resultat etiquete d'un appel a une source.

    Attributs:
        status: Issue de l'appel
        data: Enregistrement partiel (acteur) ou liste d'enregistrements (films)
        reason: Cause de l'echec pour FAILED
    """

    status: SourceStatus
    data: Any = None
    reason: Optional[str] = None

    @classmethod
    def found(cls, data: Any) -> "SourceResult":
        return cls(SourceStatus.FOUND, data=data)

    @classmethod
    def not_found(cls) -> "SourceResult":
        return cls(SourceStatus.NOT_FOUND)

    @classmethod
    def failed(cls, reason: str) -> "SourceResult":
        return cls(SourceStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        """True si la source a fourni des donnees."""
        return self.status is SourceStatus.FOUND
