import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from xml.sax.saxutils import escape

from lxml import etree

from docport.common.formatting import collapse_whitespace

UTF8_BOM = b"\xef\xbb\xbf"
MARKDOWN_FORMAT = "text/markdown"
REMARKS_HEADING = "## Remarks"

# Declaration, comments, processing instructions and doctype before the root.
_PROLOG = re.compile(r"\A(?:\s*(?:<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^>]*>))*\s*", re.S)
_HEADING = re.compile(r"^#+\s*Remarks\s*\n", re.IGNORECASE)
# Markup whose text is never touched when restyling empty tags.
_OPAQUE = re.compile(r"(<!\[CDATA\[.*?\]\]>|<!--.*?-->|<\?.*?\?>)", re.S)
_COMPACT_EMPTY_TAG = re.compile(r"(?<=[^\s/])/>")

COMPACT_EMPTY_TAG = "/>"
SPACED_EMPTY_TAG = " />"


def make_parser() -> etree.XMLParser:
    # CDATA sections and comments must survive a load/save cycle.
    return etree.XMLParser(
        strip_cdata=False,
        remove_blank_text=False,
        remove_comments=False,
        resolve_entities=False,
    )


@dataclass
class RawXml:
    """
    A parsed XML file plus the text lxml does not give back.

    ``prolog`` is the verbatim text before the root element (declaration,
    comments) and ``epilogue`` the whitespace after it. ``empty_tag`` is the
    way the file closes empty elements, ``"/>"`` or ``" />"``.
    """

    root: etree._Element
    prolog: str = ""
    epilogue: str = ""
    bom: bool = False
    newline: str = "\n"
    empty_tag: str = COMPACT_EMPTY_TAG


def _markup_parts(text: str):
    """Yields (is_markup, part); CDATA, comments and PIs are not markup."""
    for i, part in enumerate(_OPAQUE.split(text)):
        yield i % 2 == 0, part


def detect_empty_tag_style(text: str) -> str:
    spaced = compact = 0
    for is_markup, part in _markup_parts(text):
        if is_markup:
            spaced += part.count(SPACED_EMPTY_TAG)
            compact += len(_COMPACT_EMPTY_TAG.findall(part))
    return SPACED_EMPTY_TAG if spaced > compact else COMPACT_EMPTY_TAG


def restyle_empty_tags(text: str, style: str) -> str:
    # lxml always writes "/>".
    if style == COMPACT_EMPTY_TAG:
        return text
    return "".join(
        _COMPACT_EMPTY_TAG.sub(style, part) if is_markup else part
        for is_markup, part in _markup_parts(text)
    )


def parse_file(path: Path) -> RawXml:
    """
    Raises ``etree.XMLSyntaxError``, ``OSError`` or ``ValueError`` (not
    UTF-8) on unreadable input.
    """
    data = path.read_bytes()
    bom = data.startswith(UTF8_BOM)
    if bom:
        data = data[len(UTF8_BOM) :]

    text = data.decode("utf-8")
    root = etree.fromstring(data, make_parser())
    stripped = text.rstrip()
    return RawXml(
        root=root,
        prolog=_PROLOG.match(text).group(0),
        epilogue=text[len(stripped) :],
        bom=bom,
        newline="\r\n" if "\r\n" in text else "\n",
        empty_tag=detect_empty_tag_style(text),
    )


def serialize(raw: RawXml) -> str:
    body = etree.tostring(raw.root, encoding="unicode", with_tail=False)
    body = restyle_empty_tags(body, raw.empty_tag)
    if raw.newline != "\n":
        body = body.replace("\n", raw.newline)
    text = f"{raw.prolog}{body}{raw.epilogue}"
    if raw.bom:
        text = "\ufeff" + text
    return text


def inner_xml(element: etree._Element) -> str:
    parts = [escape(element.text or "")]
    for child in element:
        parts.append(etree.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts)


def set_inner_xml(element: etree._Element, markup: str) -> None:
    """Replaces the content of ``element``, keeping its attributes and tail."""
    for child in list(element):
        element.remove(child)
    try:
        wrapper = etree.fromstring(f"<wrapper>{markup}</wrapper>", make_parser())
    except etree.XMLSyntaxError:
        element.text = markup
        return
    element.text = wrapper.text
    for child in list(wrapper):
        element.append(child)


def read_text(element: Optional[etree._Element]) -> Optional[str]:
    if element is None:
        return None
    return collapse_whitespace(inner_xml(element))


def read_remarks(element: Optional[etree._Element]) -> Optional[str]:
    """
    Returns remarks as markdown.

    Docs remarks usually wrap a CDATA block in ``<format type="text/markdown">``
    that starts with a ``## Remarks`` heading; the heading is not part of the
    returned text.
    """
    if element is None:
        return None
    fmt = element.find("format")
    if fmt is None:
        return read_text(element)
    text = (fmt.text or "").strip()
    return _HEADING.sub("", text, count=1).strip()


def write_text(element: etree._Element, text: str) -> None:
    set_inner_xml(element, text)


def write_remarks(element: etree._Element, text: str) -> None:
    fmt = element.find("format")
    if fmt is None:
        for child in list(element):
            element.remove(child)
        element.text = None
        fmt = etree.SubElement(element, "format", type=MARKDOWN_FORMAT)
    fmt.text = etree.CDATA(f"\n\n{REMARKS_HEADING}\n\n{text}\n\n")
