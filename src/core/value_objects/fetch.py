"""
Objet valeur du resultat d'une requete de session.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FetchStatus(Enum):
    """Issue d'une requete via la session.

    Valeurs:
        OK: Reponse recue (corps disponible)
        ERROR: Erreur reseau ou HTTP
        LIMIT_EXCEEDED: Quota d'operations de la session atteint, aucune requete emise
    """

    OK = "ok"
    ERROR = "error"
    LIMIT_EXCEEDED = "limit_exceeded"


@dataclass(frozen=True)
class FetchResult:
    """
    Resultat type d'un fetch.

    Attributs:
        status: Issue de la requete
        text: Corps de la reponse (OK uniquement)
        status_code: Code HTTP si une reponse a ete recue
        error: Message d'erreur (ERROR uniquement)
    """

    status: FetchStatus
    text: str = ""
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK
