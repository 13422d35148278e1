from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from lxml import etree

from docport.common import bus
from docport.needle import L
from docport.spec import (
    ApiEntry,
    ApiKind,
    ApiNode,
    DocFields,
    ExceptionDoc,
    SignatureNormalizerProtocol,
)
from .xml_helpers import (
    RawXml,
    parse_file,
    read_remarks,
    read_text,
    serialize,
    write_remarks,
    write_text,
)

DOCID_LANGUAGE = "DocId"

# Where a new <exception> goes when the member has none yet, most preferred
# anchor first.
_EXCEPTION_ANCHORS = ("exception", "remarks", "value", "returns", "param")


@dataclass
class DocsDocument:
    """One Docs file: the parsed tree and the entries bound to its nodes."""

    path: Path
    raw: RawXml
    entry: ApiEntry
    bindings: List[Tuple[ApiEntry, etree._Element]] = field(default_factory=list)


class DocsCorpus:
    def __init__(self, documents: Iterable[DocsDocument] = ()):
        self.documents: List[DocsDocument] = []
        self._by_doc_id: Dict[str, DocsDocument] = {}
        for document in documents:
            self.add(document)

    def add(self, document: DocsDocument) -> None:
        self.documents.append(document)
        self._by_doc_id[document.entry.doc_id] = document

    @property
    def types(self) -> List[ApiEntry]:
        return sorted((d.entry for d in self.documents), key=lambda e: e.doc_id)

    def document_for(self, type_entry: ApiEntry) -> Optional[DocsDocument]:
        return self._by_doc_id.get(type_entry.doc_id)


def _docid_signature(element: etree._Element, tag: str) -> str:
    for sig in element.iterfind(tag):
        if sig.get("Language") == DOCID_LANGUAGE:
            return sig.get("Value") or ""
    return ""


def read_docs_element(docs: Optional[etree._Element]) -> DocFields:
    if docs is None:
        return DocFields(present=False)
    fields = DocFields(
        summary=read_text(docs.find("summary")),
        remarks=read_remarks(docs.find("remarks")),
        returns=read_text(docs.find("returns")),
        value=read_text(docs.find("value")),
    )
    for param in docs.findall("param"):
        fields.params[param.get("name") or ""] = read_text(param) or ""
    for typeparam in docs.findall("typeparam"):
        fields.typeparams[typeparam.get("name") or ""] = read_text(typeparam) or ""
    for exc in docs.findall("exception"):
        fields.exceptions.append(
            ExceptionDoc(cref=exc.get("cref") or "", text=read_text(exc) or "")
        )
    return fields


class DocsLoader:
    """Loads ECMA Docs files, one ``<Type>`` per file."""

    def __init__(self, normalizer: SignatureNormalizerProtocol):
        self.normalizer = normalizer

    def load(self, dirs: Iterable[Path]) -> DocsCorpus:
        corpus = DocsCorpus()
        for directory in dirs:
            for path in sorted(directory.rglob("*.xml")):
                document = self.load_file(path)
                if document is not None:
                    corpus.add(document)
        return corpus

    def load_file(self, path: Path) -> Optional[DocsDocument]:
        try:
            raw = parse_file(path)
        except (etree.XMLSyntaxError, OSError, ValueError) as e:
            bus.error(L.load.unreadable, path=path, error=e)
            return None

        root = raw.root
        # Namespace and index files share the folders with type files.
        if root.tag != "Type":
            bus.debug(L.load.skipped, path=path)
            return None

        name = root.get("Name") or ""
        full_name = root.get("FullName") or name
        namespace = ""
        if full_name.endswith("." + name):
            namespace = full_name[: -len(name) - 1]

        type_doc_id = _docid_signature(root, "TypeSignature")
        type_node = ApiNode(
            kind=ApiKind.TYPE,
            doc_id=type_doc_id,
            key=self.normalizer.normalize(type_doc_id),
            name=name,
            assembly=(root.findtext("AssemblyInfo/AssemblyName") or "").strip(),
            namespace=namespace,
            source_path=str(path),
        )
        type_docs = root.find("Docs")
        type_entry = ApiEntry(node=type_node, docs=read_docs_element(type_docs))
        document = DocsDocument(path=path, raw=raw, entry=type_entry)
        if type_docs is not None:
            document.bindings.append((type_entry, type_docs))

        for member in root.iterfind("Members/Member"):
            doc_id = _docid_signature(member, "MemberSignature")
            node = ApiNode(
                kind=ApiKind.MEMBER,
                doc_id=doc_id,
                key=self.normalizer.normalize(doc_id),
                name=member.get("MemberName") or "",
                assembly=(
                    member.findtext("AssemblyInfo/AssemblyName") or type_node.assembly
                ).strip(),
                namespace=namespace,
                member_type=(member.findtext("MemberType") or "").strip(),
                type_doc_id=type_doc_id,
                interface_members=tuple(
                    (im.text or "").strip()
                    for im in member.iterfind("Implements/InterfaceMember")
                    if (im.text or "").strip()
                ),
                source_path=str(path),
            )
            member_docs = member.find("Docs")
            member_entry = ApiEntry(node=node, docs=read_docs_element(member_docs))
            type_entry.members.append(member_entry)
            if member_docs is not None:
                document.bindings.append((member_entry, member_docs))

        return document


class DocsWriter:
    """
    Projects working copies back onto their parsed Docs files.

    Only elements whose text differs from the working copy are touched, so
    unchanged parts of a file keep their original markup.
    """

    def render(self, document: DocsDocument) -> str:
        for entry, docs in document.bindings:
            if entry.changed:
                self.apply(entry.docs, docs)
        return serialize(document.raw)

    def apply(self, fields: DocFields, docs: etree._Element) -> None:
        for tag in ("summary", "returns", "value"):
            text = getattr(fields, tag)
            element = docs.find(tag)
            if text is not None and element is not None:
                if read_text(element) != text:
                    write_text(element, text)

        remarks = docs.find("remarks")
        if fields.remarks is not None and remarks is not None:
            if read_remarks(remarks) != fields.remarks:
                write_remarks(remarks, fields.remarks)

        self._apply_named(docs, "param", fields.params)
        self._apply_named(docs, "typeparam", fields.typeparams)
        self._apply_exceptions(docs, fields.exceptions)

    @staticmethod
    def _apply_named(docs: etree._Element, tag: str, values: Dict[str, str]) -> None:
        for element in docs.findall(tag):
            name = element.get("name") or ""
            if name in values and read_text(element) != values[name]:
                write_text(element, values[name])

    def _apply_exceptions(
        self, docs: etree._Element, exceptions: List[ExceptionDoc]
    ) -> None:
        existing = docs.findall("exception")
        for element, exc in zip(existing, exceptions):
            if read_text(element) != exc.text:
                write_text(element, exc.text)

        anchor = self._exception_anchor(docs)
        for exc in exceptions[len(existing) :]:
            element = etree.Element("exception", cref=exc.cref)
            write_text(element, exc.text)
            anchor = self._insert_after(docs, anchor, element)

    @staticmethod
    def _exception_anchor(docs: etree._Element) -> Optional[etree._Element]:
        for tag in _EXCEPTION_ANCHORS:
            found = docs.findall(tag)
            if found:
                return found[-1]
        return None

    @staticmethod
    def _insert_after(
        docs: etree._Element,
        anchor: Optional[etree._Element],
        element: etree._Element,
    ) -> etree._Element:
        indent = docs.text if docs.text and not docs.text.strip() else None
        if anchor is None:
            children = list(docs)
            if children:
                last = children[-1]
                element.tail = last.tail
                last.tail = indent
            else:
                element.tail = docs.text
            docs.append(element)
            return element

        element.tail = anchor.tail
        anchor.tail = indent
        anchor.addnext(element)
        return element
