import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

PLACEHOLDER = "To be added."

_GENERIC_ARGS = re.compile(r"<[^<>]*>")


def is_empty_doc(text: Optional[str]) -> bool:
    """True for a missing, blank or placeholder text."""
    if text is None:
        return True
    stripped = text.strip()
    return not stripped or stripped == PLACEHOLDER


@dataclass(frozen=True, eq=False)
class CanonicalKey:
    """
    The normalized form of a DocId.

    Invalid keys come from malformed signatures. They compare unequal to every
    key, including an invalid key with the same text, so they never match.
    """

    text: str
    valid: bool = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CanonicalKey):
            return NotImplemented
        return self.valid and other.valid and self.text == other.text

    def __hash__(self) -> int:
        return hash((self.text, self.valid))

    def __str__(self) -> str:
        return self.text if self.valid else f"<invalid: {self.text}>"


class ApiKind(str, Enum):
    TYPE = "TYPE"
    MEMBER = "MEMBER"


class DocField(str, Enum):
    SUMMARY = "summary"
    REMARKS = "remarks"
    RETURNS = "returns"
    VALUE = "value"
    PARAM = "param"
    TYPEPARAM = "typeparam"


@dataclass(frozen=True)
class ApiNode:
    """Structural identity of an API, fixed once the corpus is loaded."""

    kind: ApiKind
    doc_id: str
    key: CanonicalKey
    name: str = ""
    assembly: str = ""
    namespace: str = ""
    member_type: str = ""  # Method, Property, Constructor... (members only)
    type_doc_id: str = ""  # DocId of the containing type (members only)
    interface_members: Tuple[str, ...] = ()
    source_path: str = ""

    @property
    def implements_interface(self) -> bool:
        return bool(self.interface_members)

    @property
    def is_explicit_implementation(self) -> bool:
        # Explicit implementations carry the interface in their name:
        # "System.IComparable.CompareTo". Generic argument lists are ignored.
        if self.kind != ApiKind.MEMBER or not self.implements_interface:
            return False
        name = self.name
        while _GENERIC_ARGS.search(name):
            name = _GENERIC_ARGS.sub("", name)
        return "." in name


@dataclass
class ExceptionDoc:
    cref: str
    text: str


@dataclass
class DocFields:
    """
    Mutable working copy of an entry's documentation.

    Scalar fields are ``None`` when the corresponding XML element does not
    exist; such fields are never created by the merge. ``present`` is false
    for an entry without any ``<Docs>`` element, which receives nothing.
    """

    summary: Optional[str] = None
    remarks: Optional[str] = None
    returns: Optional[str] = None
    value: Optional[str] = None
    params: Dict[str, str] = field(default_factory=dict)
    typeparams: Dict[str, str] = field(default_factory=dict)
    exceptions: List[ExceptionDoc] = field(default_factory=list)
    present: bool = True
    changed: bool = False


@dataclass
class ApiEntry:
    """A Type or a Member, distinguished by ``node.kind``."""

    node: ApiNode
    docs: DocFields = field(default_factory=DocFields)
    members: List["ApiEntry"] = field(default_factory=list)

    @property
    def key(self) -> CanonicalKey:
        return self.node.key

    @property
    def doc_id(self) -> str:
        return self.node.doc_id

    @property
    def kind(self) -> ApiKind:
        return self.node.kind

    @property
    def is_type(self) -> bool:
        return self.node.kind == ApiKind.TYPE

    @property
    def summary(self) -> Optional[str]:
        return self.docs.summary

    @property
    def remarks(self) -> Optional[str]:
        return self.docs.remarks

    @property
    def changed(self) -> bool:
        return self.docs.changed

    def __str__(self) -> str:
        return self.node.doc_id


class MergeStatus(str, Enum):
    MERGED = "MERGED"
    NOTHING_TO_MERGE = "NOTHING_TO_MERGE"
    UNMATCHED = "UNMATCHED"


@dataclass
class TypeOutcome:
    doc_id: str
    status: MergeStatus
    updated_fields: List[str] = field(default_factory=list)
    orphans: List[str] = field(default_factory=list)
    unmatched_members: List[str] = field(default_factory=list)
    skipped_members: List[str] = field(default_factory=list)
