"""
DSD container reader.

A DSD file is a ZIP archive holding ``contents.xml`` (the disclosure
markup) and optionally ``meta.xml``. The markup uses a custom ``&cr;``
entity for line breaks which is replaced before parsing.
"""

import io
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from ..errors import ContainerError, ParseError
from .markup import normalize_line_breaks

logger = logging.getLogger(__name__)

CONTENTS_MEMBER = "contents.xml"
META_MEMBER = "meta.xml"
DEFAULT_PARSER = "lxml-xml"


@dataclass
class DsdDocument:
    """Parsed DSD container."""
    contents: Tag
    meta: Optional[Tag] = None
    source: str = ""


def parse_markup(markup: str, features: str = DEFAULT_PARSER) -> Tag:
    """
    Parse DSD markup and return the document root element.

    The markup is handed to BeautifulSoup as UTF-8 bytes, so an XML
    declaration at the top is accepted by every builder.

    Args:
        markup: Raw markup text
        features: BeautifulSoup tree builder name

    Returns:
        Root element of the document

    Raises:
        ParseError: If the markup is rejected or contains no element
    """
    markup = normalize_line_breaks(markup)
    if not markup.strip():
        raise ParseError("Markup parse error: document is empty")

    try:
        soup = BeautifulSoup(markup.encode("utf-8"), features, from_encoding="utf-8")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Markup parse error: {str(e)[:200]}") from e

    root = soup.find(True)
    if root is None:
        preview = markup.strip()[:200]
        raise ParseError(f"Markup parse error: no element found in {preview!r}")
    return root


def _decode(data: bytes, member: str) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ContainerError(f"{member} is not valid UTF-8: {e}") from e


def read_dsd(source: Union[str, Path, bytes], features: str = DEFAULT_PARSER) -> DsdDocument:
    """
    Read and parse a DSD file.

    Args:
        source: Path to the .dsd file or its raw bytes
        features: BeautifulSoup tree builder name

    Returns:
        DsdDocument with the parsed contents and optional meta roots

    Raises:
        ContainerError: If the archive is unreadable or lacks contents.xml
        ParseError: If the contents markup cannot be parsed
    """
    if isinstance(source, bytes):
        name = "<bytes>"
        stream = io.BytesIO(source)
    else:
        name = str(source)
        stream = Path(source)

    try:
        with zipfile.ZipFile(stream) as archive:
            members = set(archive.namelist())
            if CONTENTS_MEMBER not in members:
                raise ContainerError(f"{CONTENTS_MEMBER} not found in {name}; is this a DSD file?")
            contents_text = _decode(archive.read(CONTENTS_MEMBER), CONTENTS_MEMBER)
            meta_text = None
            if META_MEMBER in members:
                meta_text = _decode(archive.read(META_MEMBER), META_MEMBER)
    except (zipfile.BadZipFile, OSError) as e:
        raise ContainerError(f"Cannot read DSD archive {name}: {e}") from e

    logger.info(f"Read {name}: {len(contents_text):,} chars of contents")

    contents = parse_markup(contents_text, features)
    meta = parse_markup(meta_text, features) if meta_text else None

    return DsdDocument(contents=contents, meta=meta, source=name)
