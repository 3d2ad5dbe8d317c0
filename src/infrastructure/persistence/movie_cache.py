"""
Cache des films scrapes : un fichier {code}.json par film.

Chaque fichier contient l'enveloppe {scrapedAt, sources, videoFile, data}.
Les fichiers corrompus sont ignores a la lecture.
"""

import json
from pathlib import Path
from typing import Any, Iterator, Optional

from loguru import logger

from src.core.entities.movie import MovieRecord, ScrapeEnvelope
from src.core.ports.repositories import IMovieCache
from src.utils.helpers import utc_now_iso, write_text_atomic


class JsonMovieCache(IMovieCache):
    """Implementation JSON de IMovieCache."""

    def __init__(self, cache_dir: Path) -> None:
        self._dir = cache_dir

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, code: str) -> Path:
        return self._dir / f"{code}.json"

    def exists(self, code: str) -> bool:
        return bool(code) and self.path_for(code).exists()

    def list_codes(self) -> list[str]:
        """Codes presents dans le cache, tries."""
        if not self._dir.is_dir():
            return []
        return sorted(p.stem for p in self._dir.glob("*.json"))

    def load(self, code: str) -> Optional[ScrapeEnvelope]:
        if not self.exists(code):
            return None
        path = self.path_for(code)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Fichier de scraping corrompu ignore {path.name}: {e}")
            return None
        if not isinstance(payload, dict):
            logger.warning(f"Fichier de scraping mal forme ignore: {path.name}")
            return None

        envelope = ScrapeEnvelope.from_dict(payload)
        # Le nom du fichier fait foi si le contenu ne porte pas de code
        if not envelope.data.code:
            envelope.data.code = code
            envelope.data.id = code
        return envelope

    def save(self, envelope: ScrapeEnvelope) -> bool:
        path = self.path_for(envelope.code)
        try:
            write_text_atomic(
                path, json.dumps(envelope.to_dict(), ensure_ascii=False, indent=2)
            )
        except OSError as e:
            logger.error(f"Ecriture de {path.name} impossible: {e}")
            return False
        logger.debug(f"Film sauvegarde: {path.name}")
        return True

    def patch(self, code: str, changes: dict[str, Any]) -> Optional[ScrapeEnvelope]:
        """
        Applique une edition utilisateur aux champs de data.

        Les cles sont celles du format d'echange (camelCase). L'enveloppe
        est conservee et meta.updatedAt mis a jour.

        Returns:
            Enveloppe modifiee, ou None si le film est absent ou l'ecriture echoue
        """
        envelope = self.load(code)
        if envelope is None:
            return None

        data = envelope.data.to_dict()
        data.update({k: v for k, v in changes.items() if k not in ("code", "id")})
        record = MovieRecord.from_dict(data)
        record.meta["updatedAt"] = utc_now_iso()
        envelope.data = record

        if not self.save(envelope):
            return None
        return envelope

    def delete(self, code: str) -> bool:
        path = self.path_for(code)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Suppression de {path.name} impossible: {e}")
            return False
        return True

    def delete_all(self) -> int:
        """Supprime tout le cache films. Retourne le nombre de fichiers supprimes."""
        deleted = 0
        for code in self.list_codes():
            if self.delete(code):
                deleted += 1
        logger.info(f"Cache films vide: {deleted} fichier(s) supprime(s)")
        return deleted

    def iter_envelopes(self) -> Iterator[ScrapeEnvelope]:
        for code in self.list_codes():
            envelope = self.load(code)
            if envelope is not None:
                yield envelope
