"""
Constantes globales pour MediaScrape.

Ce module contient les constantes utilisees dans l'application:
- Extensions video reconnues dans la bibliotheque
- Champs obligatoires d'une fiche acteur complete
- Noms de fichiers du cache (index, ancien index)
- Prefixe des photos d'acteurs servies localement
"""

# Extensions video reconnues
VIDEO_EXTENSIONS = frozenset({
    ".mkv",
    ".mp4",
    ".avi",
    ".mov",
    ".wmv",
    ".flv",
    ".webm",
    ".m4v",
    ".mpg",
    ".mpeg",
    ".ts",
})

# Une fiche acteur n'est complete que si tous ces champs sont renseignes
ACTOR_REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "alt_name",
    "birthdate",
    "height",
    "bust",
    "waist",
    "hips",
    "thumb",
)

# Index des variantes de noms (l'ancien nom pose probleme sous Windows)
INDEX_FILENAME = "actors-index.json"
LEGACY_INDEX_FILENAME = ".index.json"

# Chemin servi pour les photos stockees localement (upload manuel ou telechargement)
LOCAL_THUMB_PREFIX = "/actors/"

# Extensions des photos d'acteurs supprimees avec la fiche
ACTOR_IMAGE_EXTENSIONS: tuple[str, ...] = ("webp", "jpg", "jpeg", "png", "gif")

# Champs d'identification ignores par la fusion des films
MOVIE_IDENTITY_FIELDS = frozenset({"code", "dvd_id", "id", "error"})

# Prefixe des lignes de stdout demandant une confirmation interactive
PROMPT_PREFIX = "__PROMPT__:"
