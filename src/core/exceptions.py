"""
Exceptions du domaine MediaScrape.

Seule ScrapingStoppedError remonte jusqu'a l'appelant d'un batch : les erreurs
de source et de cache sont contenues a la frontiere du coordinateur.
"""


class MediaScrapeError(Exception):
    """Exception de base de l'application."""


class ConfigError(MediaScrapeError):
    """Configuration de scraping illisible ou invalide."""


class ScrapingStoppedError(MediaScrapeError):
    """
    L'utilisateur a refuse de continuer apres l'echec d'une source.

    Attributes:
        source: Nom de la source en echec
    """

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Scraping arrete par l'utilisateur apres l'echec de {source}{detail}")
