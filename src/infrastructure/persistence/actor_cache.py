"""
Cache des fiches acteurs : un fichier {slug}.nfo par acteur.

La sauvegarde ecrit la fiche puis indexe ses variantes de nom. Les erreurs
d'entree/sortie sont journalisees et traitees comme "absent", jamais
propagees.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from loguru import logger

from src.adapters.nfo import actor_to_nfo, nfo_to_actor
from src.core.entities.actor import ActorRecord
from src.core.ports.repositories import IActorCache, INameIndex
from src.services.field_merger import is_actor_complete, resolve_actor_thumb
from src.utils.constants import ACTOR_IMAGE_EXTENSIONS
from src.utils.helpers import utc_now_iso, write_text_atomic
from src.utils.slug import normalize_actor_name


class NfoActorCache(IActorCache):
    """
    Implementation NFO de IActorCache.

    Attributs:
        directory: Repertoire des fiches (et des photos {slug}.jpg, ...)
    """

    def __init__(self, actors_dir: Path, name_index: INameIndex) -> None:
        self._dir = actors_dir
        self._index = name_index

    @property
    def directory(self) -> Path:
        return self._dir

    @property
    def name_index(self) -> INameIndex:
        return self._index

    def path_for(self, actor_id: str) -> Path:
        return self._dir / f"{actor_id}.nfo"

    def exists(self, actor_id: str) -> bool:
        return bool(actor_id) and self.path_for(actor_id).exists()

    def load(self, actor_id: str) -> Optional[ActorRecord]:
        if not self.exists(actor_id):
            return None
        path = self.path_for(actor_id)
        try:
            actor = nfo_to_actor(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ET.ParseError) as e:
            logger.warning(f"Fiche acteur illisible {path.name}: {e}")
            return None
        actor.id = actor_id
        return actor

    def is_complete(self, actor: Optional[ActorRecord]) -> bool:
        return is_actor_complete(actor)

    def save(self, actor: ActorRecord) -> bool:
        """
        Persiste une fiche et indexe ses variantes de nom.

        La fiche est completee sur place : ID attribue depuis le nom s'il
        manque, date de mise a jour, thumb d'affichage resolu.

        Returns:
            True si la fiche a ete ecrite
        """
        if not actor.id:
            actor.id = normalize_actor_name(actor.name)
        if not actor.id:
            logger.error(f"Fiche acteur sans nom exploitable, non sauvegardee: {actor.name!r}")
            return False

        actor.meta.last_update = utc_now_iso()
        actor.thumb = resolve_actor_thumb(actor)

        path = self.path_for(actor.id)
        try:
            write_text_atomic(path, actor_to_nfo(actor))
        except OSError as e:
            logger.error(f"Ecriture de la fiche {path.name} impossible: {e}")
            return False

        conflicts = self._index.register(actor)
        if conflicts:
            logger.info(f"{actor.id}: {len(conflicts)} variante(s) non indexee(s) (conflit)")
        logger.debug(f"Fiche acteur sauvegardee: {path.name}")
        return True

    def delete(self, actor_id: str) -> bool:
        """
        Supprime la fiche, ses photos et ses entrees d'index.

        Returns:
            True si la fiche existait et a ete supprimee
        """
        if not actor_id:
            return False
        path = self.path_for(actor_id)
        existed = path.exists()
        try:
            path.unlink(missing_ok=True)
            for extension in ACTOR_IMAGE_EXTENSIONS:
                (self._dir / f"{actor_id}.{extension}").unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Suppression de {actor_id} impossible: {e}")
            return False
        self._index.remove(actor_id)
        if existed:
            logger.info(f"Fiche acteur supprimee: {actor_id}")
        return existed

    def list_all(self) -> list[ActorRecord]:
        """Toutes les fiches lisibles, triees par nom."""
        if not self._dir.is_dir():
            return []
        actors = []
        for nfo_path in sorted(self._dir.glob("*.nfo")):
            actor = self.load(nfo_path.stem)
            if actor is not None:
                actors.append(actor)
        return sorted(actors, key=lambda a: (a.name or a.id).lower())
