"""
Entites acteur.

ActorRecord est la fiche canonique d'un acteur (une seule fiche par slug),
ActorRef est la vue legere et denormalisee embarquee dans un MovieRecord.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional


@dataclass
class ActorMeta:
    """
    Metadonnees d'une fiche acteur.

    Attributs:
        sources: Noms des sources ayant fourni au moins un champ (ordre de contribution)
        last_update: Horodatage ISO-8601 de la derniere sauvegarde
    """

    sources: list[str] = field(default_factory=list)
    last_update: str = ""


@dataclass
class ActorRecord:
    """
    Fiche canonique d'un acteur.

    Les champs inconnus sont encodes par une chaine vide (texte) ou zero
    (mesures en cm). Le thumb affiche est resolu a la sauvegarde a partir
    de thumb_url (URL distante d'origine) et thumb_local (nom de fichier).

    Attributs:
        id: Slug canonique (ex: "hayami-remu")
        name: Nom principal (romanise)
        alt_name: Nom alternatif, eventuellement plusieurs separes par des virgules
        other_names: Autres variantes de nom
        birthdate: Date de naissance YYYY-MM-DD
        height: Taille en cm
        bust: Tour de poitrine en cm
        waist: Tour de taille en cm
        hips: Tour de hanches en cm
        thumb_url: URL d'origine de la photo
        thumb_local: Nom du fichier photo local
        thumb: Valeur d'affichage resolue
        meta: Provenance et date de mise a jour
    """

    id: str = ""
    name: str = ""
    alt_name: str = ""
    other_names: list[str] = field(default_factory=list)
    birthdate: str = ""
    height: int = 0
    bust: int = 0
    waist: int = 0
    hips: int = 0
    thumb_url: str = ""
    thumb_local: str = ""
    thumb: str = ""
    meta: ActorMeta = field(default_factory=ActorMeta)

    def to_dict(self) -> dict[str, Any]:
        """Serialise la fiche avec les cles camelCase du format d'echange."""
        return {
            "id": self.id,
            "name": self.name,
            "altName": self.alt_name,
            "otherNames": list(self.other_names),
            "birthdate": self.birthdate,
            "height": self.height,
            "bust": self.bust,
            "waist": self.waist,
            "hips": self.hips,
            "thumbUrl": self.thumb_url,
            "thumbLocal": self.thumb_local,
            "thumb": self.thumb,
            "meta": {
                "sources": list(self.meta.sources),
                "lastUpdate": self.meta.last_update,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActorRecord":
        """
        Construit une fiche depuis un dictionnaire partiel (camelCase).

        Les cles absentes prennent leur valeur par defaut, les mesures
        non numeriques sont ramenees a zero.
        """
        meta_data = data.get("meta") or {}
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            alt_name=str(data.get("altName") or ""),
            other_names=_to_str_list(data.get("otherNames")),
            birthdate=str(data.get("birthdate") or ""),
            height=_to_int(data.get("height")),
            bust=_to_int(data.get("bust")),
            waist=_to_int(data.get("waist")),
            hips=_to_int(data.get("hips")),
            thumb_url=str(data.get("thumbUrl") or ""),
            thumb_local=str(data.get("thumbLocal") or ""),
            thumb=str(data.get("thumb") or ""),
            meta=ActorMeta(
                sources=_to_str_list(meta_data.get("sources")),
                last_update=str(meta_data.get("lastUpdate") or ""),
            ),
        )

    def copy(self) -> "ActorRecord":
        """Copie independante (listes et meta dupliquees)."""
        return replace(
            self,
            other_names=list(self.other_names),
            meta=ActorMeta(
                sources=list(self.meta.sources),
                last_update=self.meta.last_update,
            ),
        )


# Champs de donnees (hors id et meta) dans l'ordre de declaration
ACTOR_DATA_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(ActorRecord) if f.name not in ("id", "meta")
)


# Cles connues d'une entree de distribution ; les autres vont dans ActorRef.extra
ACTOR_REF_KEYS = frozenset(
    {"name", "altName", "role", "thumb", "birthdate", "height", "bust", "waist", "hips"}
)


@dataclass
class ActorRef:
    """
    Reference d'acteur embarquee dans un film.

    Vue non autoritaire d'un ActorRecord, reecrite par la passe de
    reconciliation apres un batch acteurs.
    Les cles inconnues fournies par une source sont conservees telles
    quelles dans extra.
    """

    name: str = ""
    alt_name: str = ""
    role: str = ""
    thumb: str = ""
    birthdate: str = ""
    height: int = 0
    bust: int = 0
    waist: int = 0
    hips: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "altName": self.alt_name,
            "role": self.role,
            "thumb": self.thumb,
        }
        # Les mesures ne sont ecrites que si elles sont connues
        for key in ("birthdate", "height", "bust", "waist", "hips"):
            value = getattr(self, key)
            if value:
                data[key] = value
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActorRef":
        return cls(
            name=str(data.get("name") or ""),
            alt_name=str(data.get("altName") or ""),
            role=str(data.get("role") or ""),
            thumb=str(data.get("thumb") or ""),
            birthdate=str(data.get("birthdate") or ""),
            height=_to_int(data.get("height")),
            bust=_to_int(data.get("bust")),
            waist=_to_int(data.get("waist")),
            hips=_to_int(data.get("hips")),
            extra={key: value for key, value in data.items() if key not in ACTOR_REF_KEYS},
        )


def _to_str_list(value: Any) -> list[str]:
    """Liste de chaines non vides ; une chaine seule devient une liste d'un element."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item).strip() for item in value if item and str(item).strip()]


def _to_int(value: Optional[Any]) -> int:
    """Convertit une mesure en entier, 0 si inconnue ou invalide."""
    if value is None or value == "":
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0
