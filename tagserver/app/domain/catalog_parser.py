"""Decode `exiftool -listx` XML into a TagCatalog.

The listing looks like::

    <taginfo>
      <table name='EXIF::Main' g0='EXIF' g1='IFD0' g2='Image'>
        <desc lang='en'>Exif</desc>
        <tag id='270' name='ImageDescription' type='string' writable='true' g2='Image'>
          <desc lang='en'>Image Description</desc>
          <desc lang='de'>Bildbeschreibung</desc>
        </tag>
      </table>
    </taginfo>

Only the root element name is enforced. Absent attributes and descriptions
become empty strings.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET

from tagserver.app.constants import DESCRIPTION_LANGUAGES
from tagserver.app.domain.errors import MalformedCatalogError
from tagserver.app.domain.models import Table, Tag, TagCatalog

ROOT_ELEMENT = "taginfo"

# Expat holds the GIL for a whole feed; bounded chunks let other threads run between them.
FEED_CHUNK_BYTES = 64 * 1024


def _description(tag_el: ET.Element) -> dict[str, str]:
    description = {lang: "" for lang in DESCRIPTION_LANGUAGES}
    for desc_el in tag_el.findall("desc"):
        lang = desc_el.get("lang")
        if lang is None and len(desc_el):
            # Nested form: <desc><en>..</en><de>..</de></desc>
            for child in desc_el:
                if child.tag in description:
                    description[child.tag] = child.text or ""
            continue
        lang = lang or "en"
        if lang in description:
            description[lang] = desc_el.text or ""
    return description


def _tag(tag_el: ET.Element) -> Tag:
    return Tag(
        id=tag_el.get("id", ""),
        name=tag_el.get("name", ""),
        type=tag_el.get("type", ""),
        writable=tag_el.get("writable", ""),
        description=_description(tag_el),
    )


def parse_catalog(data: bytes) -> TagCatalog:
    parser = ET.XMLParser()
    try:
        for start in range(0, len(data), FEED_CHUNK_BYTES):
            parser.feed(data[start : start + FEED_CHUNK_BYTES])
        root = parser.close()
    except ET.ParseError as exc:
        raise MalformedCatalogError(f"tag listing is not well-formed XML: {exc}") from exc

    if root.tag != ROOT_ELEMENT:
        raise MalformedCatalogError(
            f"expected <{ROOT_ELEMENT}> root element, got <{root.tag}>"
        )

    tables = tuple(
        Table(
            name=table_el.get("name", ""),
            tags=tuple(_tag(tag_el) for tag_el in table_el.findall("tag")),
        )
        for table_el in root.findall("table")
    )
    return TagCatalog(tables=tables)
