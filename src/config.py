"""
Configuration de l'application via pydantic-settings.

Deux niveaux :
- Settings : parametres du processus, charges depuis les variables
  d'environnement avec le prefixe MEDIASCRAPE_ (et un fichier .env optionnel)
- ScrapeConfig : document JSON (config.json) decrivant la bibliotheque, les
  sources actives par type d'entite et les priorites par champ. Il est lu une
  seule fois au demarrage du processus.
"""

import json
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.exceptions import ConfigError
from src.utils.helpers import write_text_atomic

# Trouver le fichier .env a la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres du processus avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe MEDIASCRAPE_.
    Exemple : MEDIASCRAPE_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIASCRAPE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Chemins (avec expansion ~)
    config_path: Path = Field(default=Path("config.json"))
    data_dir: Path = Field(default=Path("data"))
    scrapers_dir: Path = Field(default=Path("scrapers"))
    http_cache_dir: Path = Field(default=Path(".cache/http"))

    # Scraping
    actor_timeout_seconds: float = Field(default=10.0, gt=0)
    movie_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    item_delay_seconds: float = Field(default=1.0, ge=0)
    session_max_operations: int = Field(default=50, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/mediascrape.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator(
        "config_path", "data_dir", "scrapers_dir", "http_cache_dir", "log_file",
        mode="before",
    )
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()


class ActorScrapersConfig(BaseModel):
    """Section scrapers.actors de config.json."""

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = True
    scrapers: list[str] = Field(default_factory=lambda: ["javdb"])
    external_path: str = Field(default="", alias="externalPath")


class ScrapersConfig(BaseModel):
    """Section scrapers de config.json."""

    video: list[str] = Field(default_factory=lambda: ["javlibrary", "r18dev"])
    actors: ActorScrapersConfig = Field(default_factory=ActorScrapersConfig)


class ScrapeConfig(BaseModel):
    """
    Document de configuration du scraping (config.json).

    Les cles camelCase du document sont conservees comme alias pour rester
    compatible avec les fichiers existants.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    library_path: str = Field(default="", alias="libraryPath")
    language: str = "en"
    mode: str = "scrape"
    scrapers: ScrapersConfig = Field(default_factory=ScrapersConfig)
    field_priorities: dict[str, list[str]] = Field(
        default_factory=dict, alias="fieldPriorities"
    )
    actors_enabled: Optional[bool] = Field(default=None, alias="actorsEnabled")
    source_commands: dict[str, list[str]] = Field(
        default_factory=dict, alias="sourceCommands"
    )
    http_sources: dict[str, str] = Field(default_factory=dict, alias="httpSources")

    @property
    def video_scrapers(self) -> list[str]:
        """Ordre global des sources de films."""
        return list(self.scrapers.video)

    @property
    def actor_scrapers(self) -> list[str]:
        """Ordre des sources d'acteurs."""
        return list(self.scrapers.actors.scrapers)

    @property
    def actor_scraping_enabled(self) -> bool:
        """Le scraping d'acteurs suit actorsEnabled s'il est defini, sinon la section actors."""
        if self.actors_enabled is not None:
            return self.actors_enabled
        return self.scrapers.actors.enabled

    def field_priority(self, field_name: str) -> list[str]:
        """
        Ordre des sources pour un champ de film.

        La surcharge fieldPriorities[field] l'emporte sur l'ordre global.
        """
        override = self.field_priorities.get(field_name)
        if override:
            return list(override)
        return self.video_scrapers

    def movie_cache_dir(self, data_dir: Path) -> Path:
        """Repertoire des {code}.json : {libraryPath}/.javinizer/scrape."""
        if self.library_path:
            return Path(self.library_path).expanduser() / ".javinizer" / "scrape"
        return data_dir / "scrape"

    def actor_cache_dir(self, data_dir: Path) -> Path:
        """Repertoire des fiches acteurs : externalPath si defini, sinon data/actors."""
        external = self.scrapers.actors.external_path.strip()
        if external:
            return Path(external).expanduser()
        return data_dir / "actors"


def load_scrape_config(path: Path) -> ScrapeConfig:
    """
    Charge config.json, en le creant avec les valeurs par defaut s'il est absent.

    Raises:
        ConfigError: Si le document est illisible ou invalide
    """
    if not path.exists():
        config = ScrapeConfig()
        logger.info(f"Configuration absente, creation par defaut: {path}")
        save_scrape_config(config, path)
        return config

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Impossible de lire {path}: {e}") from e

    try:
        return ScrapeConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Configuration invalide dans {path}: {e}") from e


def save_scrape_config(config: ScrapeConfig, path: Path) -> None:
    """Ecrit config.json (remplacement complet du fichier)."""
    payload = config.model_dump(by_alias=True, exclude_none=True)
    write_text_atomic(path, json.dumps(payload, ensure_ascii=False, indent=2))
