from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from docport.common import bus
from docport.config import MergeConfiguration
from docport.needle import L
from docport.spec import ApiEntry, CanonicalKey, SignatureNormalizerProtocol


@dataclass
class MemberPairing:
    destination: ApiEntry
    source: Optional[ApiEntry]


@dataclass
class TypePairing:
    destination: ApiEntry
    source: Optional[ApiEntry]
    members: List[MemberPairing] = field(default_factory=list)
    skipped: List[ApiEntry] = field(default_factory=list)
    malformed: List[ApiEntry] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.source is not None


class SourceIndex:
    """Read-only lookup of source entries by canonical key."""

    def __init__(self) -> None:
        self._types: Dict[CanonicalKey, ApiEntry] = {}
        self._members: Dict[CanonicalKey, Dict[CanonicalKey, ApiEntry]] = {}
        self.duplicates: List[str] = []
        self.malformed: List[str] = []

    def add(
        self, entry: ApiEntry, type_key: Optional[CanonicalKey] = None
    ) -> Optional[ApiEntry]:
        """Stores ``entry`` and returns the entry it replaced, if any."""
        if type_key is None:
            bucket = self._types
        else:
            bucket = self._members.setdefault(type_key, {})
        previous = bucket.get(entry.key)
        bucket[entry.key] = entry
        return previous

    def find_type(self, key: CanonicalKey) -> Optional[ApiEntry]:
        return self._types.get(key)

    def find_member(
        self, type_key: CanonicalKey, member_key: CanonicalKey
    ) -> Optional[ApiEntry]:
        return self._members.get(type_key, {}).get(member_key)

    def __len__(self) -> int:
        return len(self._types) + sum(len(m) for m in self._members.values())


class Matcher:
    def __init__(
        self, config: MergeConfiguration, normalizer: SignatureNormalizerProtocol
    ):
        self.config = config
        self.normalizer = normalizer

    def build_index(self, entries: Iterable[ApiEntry]) -> SourceIndex:
        index = SourceIndex()
        # Sorting makes "last wins" independent of the order files were read in.
        ordered = sorted(entries, key=lambda e: (e.node.source_path, e.doc_id))

        for entry in ordered:
            if not entry.key.valid:
                index.malformed.append(entry.doc_id)
                bus.warning(
                    L.match.malformed, key=entry.doc_id, path=entry.node.source_path
                )
                continue

            type_key = None
            if not entry.is_type:
                type_key = self.normalizer.containing_type_key(entry.doc_id)
                if not type_key.valid:
                    index.malformed.append(entry.doc_id)
                    bus.warning(
                        L.match.malformed,
                        key=entry.doc_id,
                        path=entry.node.source_path,
                    )
                    continue

            previous = index.add(entry, type_key)
            if previous is not None:
                index.duplicates.append(entry.doc_id)
                bus.warning(
                    L.match.duplicate,
                    key=entry.doc_id,
                    previous=previous.node.source_path,
                    path=entry.node.source_path,
                )

        return index

    def pair(self, index: SourceIndex, dest_type: ApiEntry) -> TypePairing:
        source_type = index.find_type(dest_type.key)
        pairing = TypePairing(destination=dest_type, source=source_type)
        if source_type is None:
            return pairing

        for member in dest_type.members:
            if (
                self.config.skip_interface_implementations
                and member.node.implements_interface
            ):
                pairing.skipped.append(member)
                continue

            if not member.key.valid:
                pairing.malformed.append(member)
                bus.warning(
                    L.match.malformed, key=member.doc_id, path=member.node.source_path
                )
                pairing.members.append(MemberPairing(member, None))
                continue

            source_member = index.find_member(dest_type.key, member.key)
            pairing.members.append(MemberPairing(member, source_member))

        return pairing
