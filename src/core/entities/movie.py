"""
Entites film.

MovieRecord reprend le format standard des scrapers de films (cles camelCase
sur disque). ScrapeEnvelope est l'enveloppe persistee dans {code}.json.
"""

from dataclasses import dataclass, field
from typing import Any

from src.core.entities.actor import ActorRef


# Correspondance attribut Python -> cle du format d'echange
_SCALAR_FIELDS: dict[str, str] = {
    "id": "id",
    "code": "code",
    "content_id": "contentId",
    "title": "title",
    "original_title": "originalTitle",
    "release_date": "releaseDate",
    "runtime": "runtime",
    "studio": "studio",
    "label": "label",
    "series": "series",
    "director": "director",
    "plot": "plot",
    "tagline": "tagline",
    "content_rating": "contentRating",
    "cover_url": "coverUrl",
    "screenshot_url": "screenshotUrl",
    "trailer_url": "trailerUrl",
}

_STRUCTURED_KEYS = frozenset(
    {"rating", "genres", "tags", "actor", "images", "local", "meta"}
)

MOVIE_KEYS: frozenset[str] = frozenset(_SCALAR_FIELDS.values()) | _STRUCTURED_KEYS


def _default_rating() -> dict[str, Any]:
    return {"value": 0, "votes": 0}


def _default_images() -> dict[str, Any]:
    return {"poster": "", "fanart": []}


def _default_local() -> dict[str, Any]:
    return {"path": "", "files": [], "video": ""}


def _default_meta() -> dict[str, Any]:
    return {"createdAt": "", "updatedAt": "", "locked": False}


@dataclass
class MovieRecord:
    """
    Metadonnees d'un film identifie par son code.

    Le code est la cle unique : un film persiste est toujours stocke
    sous {code}.json. Les champs inconnus renvoyes par une source sont
    conserves dans extra pour ne rien perdre a la fusion.
    """

    code: str
    id: str = ""
    content_id: str = ""
    title: str = ""
    original_title: str = ""
    release_date: str = ""
    runtime: int = 0
    studio: str = ""
    label: str = ""
    series: str = ""
    director: str = ""
    plot: str = ""
    tagline: str = ""
    content_rating: str = ""
    rating: dict[str, Any] = field(default_factory=_default_rating)
    genres: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    actor: list[ActorRef] = field(default_factory=list)
    cover_url: str = ""
    screenshot_url: str = ""
    trailer_url: str = ""
    images: dict[str, Any] = field(default_factory=_default_images)
    local: dict[str, Any] = field(default_factory=_default_local)
    meta: dict[str, Any] = field(default_factory=_default_meta)
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # L'id suit toujours le code
        if not self.id:
            self.id = self.code

    def to_dict(self) -> dict[str, Any]:
        """Serialise le film avec tous les champs du schema."""
        data: dict[str, Any] = {
            key: getattr(self, attr) for attr, key in _SCALAR_FIELDS.items()
        }
        data["rating"] = dict(self.rating)
        data["genres"] = list(self.genres)
        data["tags"] = list(self.tags)
        data["actor"] = [ref.to_dict() for ref in self.actor]
        data["images"] = dict(self.images)
        data["local"] = dict(self.local)
        data["meta"] = dict(self.meta)
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MovieRecord":
        """Construit un film depuis un dictionnaire (format d'echange)."""
        code = str(data.get("code") or data.get("dvd_id") or data.get("id") or "")
        record = cls(code=code)
        for attr, key in _SCALAR_FIELDS.items():
            if key in data and data[key] is not None:
                default = getattr(record, attr)
                value = data[key]
                if isinstance(default, int):
                    try:
                        value = int(float(value))
                    except (TypeError, ValueError):
                        value = 0
                setattr(record, attr, value)
        record.id = code or record.id
        if isinstance(data.get("rating"), dict):
            record.rating = {**_default_rating(), **data["rating"]}
        record.genres = [str(g) for g in data.get("genres") or []]
        record.tags = [str(t) for t in data.get("tags") or []]
        record.actor = [
            ActorRef.from_dict(a) for a in data.get("actor") or [] if isinstance(a, dict)
        ]
        if isinstance(data.get("images"), dict):
            record.images = {**_default_images(), **data["images"]}
        if isinstance(data.get("local"), dict):
            record.local = {**_default_local(), **data["local"]}
        if isinstance(data.get("meta"), dict):
            record.meta = {**_default_meta(), **data["meta"]}
        record.extra = {
            key: value
            for key, value in data.items()
            if key not in MOVIE_KEYS and key not in ("dvd_id", "error")
        }
        return record


@dataclass
class ScrapeEnvelope:
    """
    Enveloppe persistee d'un film scrape.

    Attributs:
        data: Film fusionne
        sources: Sources ayant fourni des donnees pour ce code
        video_file: Chemin du fichier video correspondant dans la bibliotheque
        scraped_at: Horodatage ISO-8601 du scraping
    """

    data: MovieRecord
    sources: list[str] = field(default_factory=list)
    video_file: str = ""
    scraped_at: str = ""

    @property
    def code(self) -> str:
        return self.data.code

    def to_dict(self) -> dict[str, Any]:
        return {
            "scrapedAt": self.scraped_at,
            "sources": list(self.sources),
            "videoFile": self.video_file,
            "data": self.data.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ScrapeEnvelope":
        """
        Relit une enveloppe, en acceptant aussi l'ancien format sans wrapper.
        """
        if isinstance(payload.get("data"), dict):
            return cls(
                data=MovieRecord.from_dict(payload["data"]),
                sources=[str(s) for s in payload.get("sources") or []],
                video_file=str(payload.get("videoFile") or ""),
                scraped_at=str(payload.get("scrapedAt") or ""),
            )
        return cls(data=MovieRecord.from_dict(payload))
