"""
Index JSON des variantes de noms d'acteurs.

Fichier plat actors-index.json : variante de nom en minuscules -> slug.
Le stockage des fiches (.nfo) fait autorite : l'index peut toujours etre
reconstruit a partir des fiches (rebuild) et l'est automatiquement au
demarrage s'il est absent ou plus ancien qu'une fiche (ensure_consistent).

Politique de conflit : le premier proprietaire vivant d'une cle la garde.
Une cle deja attribuee a un autre ID dont la fiche existe n'est pas
ecrasee ; une cle pointant vers une fiche disparue est reattribuee.
"""

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from loguru import logger

from src.adapters.nfo import nfo_to_actor
from src.core.entities.actor import ActorRecord
from src.core.ports.repositories import INameIndex, RebuildStats
from src.utils.constants import INDEX_FILENAME, LEGACY_INDEX_FILENAME
from src.utils.helpers import write_text_atomic


def index_key(name: str) -> str:
    """Cle d'index : nom en minuscules sans espaces de bord."""
    return name.strip().lower() if name else ""


def index_keys(actor: ActorRecord) -> list[str]:
    """
    Toutes les cles d'index d'une fiche, sans doublon.

    Nom principal, chaque segment du nom alternatif (separe par des
    virgules) et chaque autre variante.
    """
    candidates = [actor.name, *actor.alt_name.split(","), *actor.other_names]
    keys: list[str] = []
    for candidate in candidates:
        key = index_key(candidate)
        if key and key not in keys:
            keys.append(key)
    return keys


class JsonNameIndex(INameIndex):
    """
    Implementation fichier de INameIndex.

    Toute erreur de lecture ou de parsing donne un index vide : le systeme
    prefere perdre des entrees jusqu'au prochain rebuild plutot que
    d'echouer.
    """

    def __init__(self, actors_dir: Path) -> None:
        """
        Args:
            actors_dir: Repertoire des fiches acteurs (contient aussi l'index)
        """
        self._dir = actors_dir
        self._path = actors_dir / INDEX_FILENAME
        self._legacy_path = actors_dir / LEGACY_INDEX_FILENAME
        self._migration_checked = False

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Lecture / ecriture
    # ------------------------------------------------------------------

    def _migrate_legacy(self) -> None:
        """Renomme une seule fois l'ancien fichier .index.json."""
        if self._migration_checked:
            return
        self._migration_checked = True
        if self._path.exists() or not self._legacy_path.exists():
            return
        try:
            self._legacy_path.rename(self._path)
            logger.info(f"Index migre: {self._legacy_path.name} -> {self._path.name}")
        except OSError as e:
            logger.warning(f"Migration de l'index impossible: {e}")

    def load(self) -> dict[str, str]:
        """Charge l'index complet (vide en cas d'erreur)."""
        self._migrate_legacy()
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Index illisible, utilisation d'un index vide: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Index mal forme ({type(data).__name__}), ignore")
            return {}
        index: dict[str, str] = {}
        for raw_key, value in data.items():
            key = index_key(str(raw_key))
            if key and isinstance(value, str) and value:
                index.setdefault(key, value)
        return index

    def save(self, index: dict[str, str]) -> bool:
        """Ecrit l'index complet. Retourne False si l'ecriture echoue."""
        try:
            write_text_atomic(self._path, json.dumps(index, ensure_ascii=False, indent=2))
        except OSError as e:
            logger.error(f"Ecriture de l'index impossible: {e}")
            return False
        return True

    def _record_exists(self, actor_id: str) -> bool:
        return (self._dir / f"{actor_id}.nfo").exists()

    # ------------------------------------------------------------------
    # Operations INameIndex
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> Optional[str]:
        """Recherche exacte, sans inversion ni approximation."""
        key = index_key(name)
        if not key:
            return None
        return self.load().get(key)

    def register(self, actor: ActorRecord) -> list[str]:
        """
        Indexe toutes les variantes de nom de la fiche.

        Une seule ecriture pour l'ensemble des variantes.

        Returns:
            Cles refusees car deja detenues par un autre acteur existant
        """
        if not actor.id:
            return []

        index = self.load()
        conflicts: list[str] = []
        for key in index_keys(actor):
            owner = index.get(key)
            if owner == actor.id:
                continue
            if owner and self._record_exists(owner):
                logger.warning(
                    f"Conflit d'index: '{key}' appartient deja a {owner}, "
                    f"non attribue a {actor.id}"
                )
                conflicts.append(key)
                continue
            index[key] = actor.id

        self.save(index)
        return conflicts

    def remove(self, actor_id: str) -> bool:
        """Supprime toutes les cles pointant vers actor_id."""
        index = self.load()
        remaining = {key: value for key, value in index.items() if value != actor_id}
        if len(remaining) == len(index):
            return False
        self.save(remaining)
        logger.debug(f"{len(index) - len(remaining)} entree(s) d'index supprimee(s) pour {actor_id}")
        return True

    def rebuild(self) -> RebuildStats:
        """
        Reconstruit l'index depuis les fiches .nfo.

        Les entrees de l'index precedent ne servent qu'a departager les
        collisions : un proprietaire dont la fiche existe et porte encore la
        cle la garde. Les autres cles vont a la premiere fiche par ordre de
        nom de fichier.
        """
        stats = RebuildStats()
        previous = self.load()
        keys_by_id: dict[str, list[str]] = {}

        nfo_files = sorted(self._dir.glob("*.nfo")) if self._dir.is_dir() else []
        for nfo_path in nfo_files:
            try:
                actor = nfo_to_actor(nfo_path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, ET.ParseError) as e:
                logger.warning(f"Fiche ignoree pendant la reconstruction: {nfo_path.name}: {e}")
                stats.failed += 1
                continue

            keys_by_id[nfo_path.stem] = index_keys(actor)
            stats.processed += 1

        index = {
            key: owner
            for key, owner in previous.items()
            if key in keys_by_id.get(owner, ())
        }
        for actor_id, keys in keys_by_id.items():
            for key in keys:
                index.setdefault(key, actor_id)

        self.save(index)
        stats.total_entries = len(index)
        stats.unique_actors = len(set(index.values()))
        logger.info(
            f"Index reconstruit: {stats.processed} fiche(s), {stats.failed} echec(s), "
            f"{stats.total_entries} entree(s), {stats.unique_actors} acteur(s)"
        )
        return stats

    def ensure_consistent(self) -> Optional[RebuildStats]:
        """
        Reconstruit l'index s'il ne reflete pas le stockage des fiches.

        C'est le cas quand l'index est absent alors que des fiches existent,
        ou quand une fiche a ete modifiee apres la derniere ecriture de
        l'index (crash entre les deux ecritures, edition manuelle).

        Returns:
            Statistiques de reconstruction, ou None si rien n'a ete fait
        """
        self._migrate_legacy()
        nfo_files = list(self._dir.glob("*.nfo")) if self._dir.is_dir() else []
        if not nfo_files:
            return None

        if self._path.exists():
            try:
                index_mtime = self._path.stat().st_mtime
                stale = any(p.stat().st_mtime > index_mtime for p in nfo_files)
            except OSError as e:
                logger.warning(f"Verification de l'index impossible: {e}")
                stale = True
            if not stale:
                return None
            logger.info("Index plus ancien que les fiches, reconstruction")
        else:
            logger.info("Index absent, reconstruction depuis les fiches")

        return self.rebuild()
