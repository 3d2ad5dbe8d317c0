"""
Interface port du canal de confirmation interactif.

Les demandes "continuer ?" des sources et du coordinateur passent par ce
canal ; le transport (console, WebSocket, reponse automatique) est un
adaptateur branche derriere.
"""

from abc import ABC, abstractmethod


class IConfirmationChannel(ABC):
    """Canal requete/reponse oui/non."""

    @abstractmethod
    async def request_confirmation(self, message: str) -> bool:
        """Pose une question et attend la reponse de l'utilisateur."""
        ...
