from pathlib import Path
from typing import Iterable, List, Optional

from lxml import etree

from docport.common import bus
from docport.config import MergeConfiguration
from docport.needle import L
from docport.spec import (
    ApiEntry,
    ApiKind,
    ApiNode,
    DocFields,
    ExceptionDoc,
    SignatureNormalizerProtocol,
)
from .xml_helpers import inner_xml, parse_file, read_text


def read_doc_fields(element: etree._Element) -> DocFields:
    """Reads a ``<member>`` element of an IntelliSense file."""
    docs = DocFields(
        summary=read_text(element.find("summary")),
        remarks=_read_block(element.find("remarks")),
        returns=read_text(element.find("returns")),
        value=read_text(element.find("value")),
    )
    for param in element.findall("param"):
        name = param.get("name")
        if name:
            docs.params[name] = read_text(param) or ""
    for typeparam in element.findall("typeparam"):
        name = typeparam.get("name")
        if name:
            docs.typeparams[name] = read_text(typeparam) or ""
    for exc in element.findall("exception"):
        cref = exc.get("cref")
        if cref:
            docs.exceptions.append(ExceptionDoc(cref=cref, text=read_text(exc) or ""))
    return docs


def _read_block(element: Optional[etree._Element]) -> Optional[str]:
    # Keeps <para> markup so paragraphs survive the markdown conversion.
    if element is None:
        return None
    return inner_xml(element).strip()


class IntelliSenseLoader:
    """
    Loads the ``<doc><members>`` files compilers emit next to assemblies.

    Files whose assembly is not included by the configuration are skipped
    without being read further.
    """

    def __init__(
        self, config: MergeConfiguration, normalizer: SignatureNormalizerProtocol
    ):
        self.config = config
        self.normalizer = normalizer

    def load(self, dirs: Iterable[Path]) -> List[ApiEntry]:
        entries: List[ApiEntry] = []
        for directory in dirs:
            for path in sorted(directory.rglob("*.xml")):
                entries.extend(self.load_file(path))
        return entries

    def load_file(self, path: Path) -> List[ApiEntry]:
        try:
            raw = parse_file(path)
        except (etree.XMLSyntaxError, OSError, ValueError) as e:
            bus.error(L.load.unreadable, path=path, error=e)
            return []

        root = raw.root
        if root.tag != "doc":
            bus.debug(L.load.skipped, path=path)
            return []

        assembly = (root.findtext("assembly/name") or "").strip()
        if not self.config.includes_assembly(assembly):
            bus.debug(L.load.assembly_excluded, path=path, assembly=assembly)
            return []

        entries = []
        for member in root.iterfind("members/member"):
            doc_id = member.get("name") or ""
            kind = ApiKind.TYPE if doc_id.startswith("T:") else ApiKind.MEMBER
            node = ApiNode(
                kind=kind,
                doc_id=doc_id,
                key=self.normalizer.normalize(doc_id),
                name=doc_id[2:] if doc_id[1:2] == ":" else doc_id,
                assembly=assembly,
                source_path=str(path),
            )
            entries.append(ApiEntry(node=node, docs=read_doc_fields(member)))

        bus.debug(L.load.file, path=path, count=len(entries))
        return entries
