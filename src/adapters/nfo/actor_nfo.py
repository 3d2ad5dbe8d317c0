"""
Serialisation des fiches acteurs au format NFO (XML Kodi).

Un element par champ, <othername> et <source> repetes pour les listes,
mesures ecrites en entiers et omises quand elles valent zero. Les champs
vides ne sont pas ecrits.
"""

import xml.etree.ElementTree as ET

from src.core.entities.actor import ActorMeta, ActorRecord

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

_TEXT_TAGS: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("alt_name", "altname"),
)
_MEASURE_TAGS: tuple[str, ...] = ("height", "bust", "waist", "hips")
_THUMB_TAGS: tuple[tuple[str, str], ...] = (
    ("thumb_url", "thumburl"),
    ("thumb_local", "thumblocal"),
    ("thumb", "thumb"),
)


def actor_to_nfo(actor: ActorRecord) -> str:
    """
    Convertit une fiche acteur en document NFO.

    L'ID n'est pas ecrit : il est porte par le nom du fichier.
    """
    root = ET.Element("actor")

    for attr, tag in _TEXT_TAGS:
        value = getattr(actor, attr)
        if value:
            ET.SubElement(root, tag).text = value

    for other_name in actor.other_names:
        if other_name:
            ET.SubElement(root, "othername").text = other_name

    if actor.birthdate:
        ET.SubElement(root, "birthdate").text = actor.birthdate

    for tag in _MEASURE_TAGS:
        value = getattr(actor, tag)
        if value and value > 0:
            ET.SubElement(root, tag).text = str(int(value))

    for attr, tag in _THUMB_TAGS:
        value = getattr(actor, attr)
        if value:
            ET.SubElement(root, tag).text = value

    if actor.meta.sources:
        sources = ET.SubElement(root, "sources")
        for source in actor.meta.sources:
            ET.SubElement(sources, "source").text = source

    if actor.meta.last_update:
        ET.SubElement(root, "lastupdate").text = actor.meta.last_update

    ET.indent(root, space="  ")
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def nfo_to_actor(content: str) -> ActorRecord:
    """
    Relit un document NFO en fiche acteur (sans ID).

    Raises:
        xml.etree.ElementTree.ParseError: Si le document n'est pas du XML valide
    """
    root = ET.fromstring(content.encode("utf-8"))

    def text_of(tag: str) -> str:
        element = root.find(tag)
        if element is None or element.text is None:
            return ""
        return element.text.strip()

    def int_of(tag: str) -> int:
        raw = text_of(tag)
        try:
            return int(float(raw)) if raw else 0
        except ValueError:
            return 0

    return ActorRecord(
        name=text_of("name"),
        alt_name=text_of("altname"),
        other_names=[
            e.text.strip() for e in root.findall("othername") if e.text and e.text.strip()
        ],
        birthdate=text_of("birthdate"),
        height=int_of("height"),
        bust=int_of("bust"),
        waist=int_of("waist"),
        hips=int_of("hips"),
        thumb_url=text_of("thumburl"),
        thumb_local=text_of("thumblocal"),
        thumb=text_of("thumb"),
        meta=ActorMeta(
            sources=[
                e.text.strip() for e in root.iter("source") if e.text and e.text.strip()
            ],
            last_update=text_of("lastupdate"),
        ),
    )
