"""
Normalisation d'identite : nom libre -> slug canonique.

Fonction pure et stable, utilisee a la fois pour creer les IDs des nouvelles
fiches et pour sonder le cache quand l'index n'a pas d'entree.
"""

import re

# Hiragana, katakana, ponctuation CJK, formes pleine chasse, ideogrammes CJK
_CJK_PATTERN = re.compile(
    "[\u3000-\u303f\u3040-\u309f\u30a0-\u30ff\uff00-\uff9f\u4e00-\u9faf\u3400-\u4dbf]"
)
_SYMBOL_PATTERN = re.compile(r"[^\w\s-]", re.ASCII)
_SPACES_PATTERN = re.compile(r"\s+")
_HYPHENS_PATTERN = re.compile(r"-+")


def normalize_actor_name(name: str) -> str:
    """
    Convertit un nom en slug.

    Minuscules, caracteres japonais/CJK et symboles supprimes, espaces
    remplaces par un tiret unique, tirets de bord retires.

    Examples:
        >>> normalize_actor_name("Hayami Remu")
        'hayami-remu'
        >>> normalize_actor_name("  Mao  Hamasaki (浜崎真緒) ")
        'mao-hamasaki'
    """
    if not name:
        return ""
    normalized = _CJK_PATTERN.sub("", name.lower()).strip()
    normalized = _SYMBOL_PATTERN.sub("", normalized)
    normalized = _SPACES_PATTERN.sub("-", normalized)
    normalized = _HYPHENS_PATTERN.sub("-", normalized)
    return normalized.strip("-")


def invert_name(name: str) -> str:
    """
    Inverse un nom en deux parties ("Mao Hamasaki" -> "Hamasaki Mao").

    Les noms d'une seule partie ou de plus de deux parties sont renvoyes
    tels quels (nettoyes des espaces de bord).
    """
    parts = name.strip().split()
    if len(parts) == 2:
        return f"{parts[1]} {parts[0]}"
    return name.strip()
