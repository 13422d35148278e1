import re
import textwrap
from typing import List, Optional
from xml.sax.saxutils import unescape

_WHITESPACE = re.compile(r"\s+")
_PARA = re.compile(r"<para\s*/>|</?para>")
_SEE_CREF = re.compile(r'<see\s+cref="(?:[A-Za-z]:)?([^"]+)"\s*/>')
_SEE_CREF_TEXT = re.compile(r'<see\s+cref="(?:[A-Za-z]:)?([^"]+)"\s*>(.*?)</see>', re.S)
_SEE_LANGWORD = re.compile(r'<see\s+langword="([^"]+)"\s*/>')
_SEE_HREF = re.compile(r'<see\s+href="([^"]+)"\s*>(.*?)</see>', re.S)
_REF = re.compile(r'<(?:paramref|typeparamref)\s+name="([^"]+)"\s*/>')
_CODE_INLINE = re.compile(r"<c>(.*?)</c>", re.S)
_CODE_BLOCK = re.compile(
    r'<code(?:\s+(?:language|lang)="([^"]*)")?\s*>(.*?)</code>', re.S
)
_CODE_TOKEN = re.compile(r"\x00(\d+)\x00")
_BLANK_LINES = re.compile(r"\n{3,}")


def collapse_whitespace(text: Optional[str]) -> str:
    """Joins the lines of an XML text block into a single line."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def xref_uid(doc_id: str) -> str:
    """``M:System.IComparable.CompareTo(System.Object)`` -> the part after ``M:``."""
    if len(doc_id) > 2 and doc_id[1] == ":":
        return doc_id[2:]
    return doc_id


def to_markdown(text: Optional[str]) -> str:
    """
    Converts IntelliSense remarks into the markdown flavour Docs remarks use.

    ``<para>`` blocks become paragraphs, ``<code>`` blocks become fenced
    blocks that keep their line breaks, ``<see cref>`` becomes an ``<xref:>``
    link and language keywords and parameter references become inline code.
    """
    if not text:
        return ""

    fences: List[str] = []

    def stash(match: re.Match) -> str:
        body = textwrap.dedent(unescape(match.group(2)).strip("\n")).rstrip()
        fences.append(f"```{match.group(1) or ''}\n{body}\n```")
        return f"<para>\x00{len(fences) - 1}\x00</para>"

    text = _CODE_BLOCK.sub(stash, text)
    paragraphs = [collapse_whitespace(p) for p in _PARA.split(text)]
    result = "\n\n".join(p for p in paragraphs if p)

    result = _SEE_CREF_TEXT.sub(lambda m: f"[{m.group(2)}](xref:{m.group(1)})", result)
    result = _SEE_CREF.sub(lambda m: f"<xref:{m.group(1)}>", result)
    result = _SEE_LANGWORD.sub(lambda m: f"`{m.group(1)}`", result)
    result = _SEE_HREF.sub(lambda m: f"[{m.group(2)}]({m.group(1)})", result)
    result = _REF.sub(lambda m: f"`{m.group(1)}`", result)
    result = _CODE_INLINE.sub(lambda m: f"`{m.group(1)}`", result)
    result = _BLANK_LINES.sub("\n\n", result).strip()
    return _CODE_TOKEN.sub(lambda m: fences[int(m.group(1))], result)
