from typing import Dict, Iterable, List, Optional

from docport.common import bus
from docport.common.formatting import to_markdown, xref_uid
from docport.config import MergeConfiguration
from docport.needle import L
from docport.spec import (
    ApiEntry,
    CanonicalKey,
    SignatureNormalizerProtocol,
    is_empty_doc,
)
from .matcher import SourceIndex

BLOCK_TEMPLATE = "Remarks copied from <xref:{uid}>:\n\n{remarks}"
BLOCK_SEPARATOR = "\n\n"


class InterfaceRemarksResolver:
    """
    Looks up the remarks of the interface members a member implements.

    Remarks are captured once, before any merge runs, so the blocks a member
    receives do not depend on the order types are processed in.
    """

    def __init__(
        self,
        config: MergeConfiguration,
        normalizer: SignatureNormalizerProtocol,
        source_index: Optional[SourceIndex] = None,
    ):
        self.config = config
        self.normalizer = normalizer
        self.source_index = source_index
        # Every destination member, with or without remarks.
        self._snapshot: Dict[CanonicalKey, Optional[str]] = {}

    @classmethod
    def snapshot(
        cls,
        config: MergeConfiguration,
        normalizer: SignatureNormalizerProtocol,
        dest_types: Iterable[ApiEntry],
        source_index: Optional[SourceIndex] = None,
    ) -> "InterfaceRemarksResolver":
        """
        Captures the remarks of every destination member.

        A member whose destination remarks are empty falls back to its source
        remarks, which is what the merge writes into it.
        """
        resolver = cls(config, normalizer, source_index)
        for dest_type in dest_types:
            for member in dest_type.members:
                if not member.key.valid:
                    continue
                text = member.remarks
                if is_empty_doc(text):
                    text = resolver._source_remarks(member.doc_id)
                resolver._snapshot[member.key] = (
                    None if is_empty_doc(text) else text.strip()
                )
        return resolver

    def _source_remarks(self, doc_id: str) -> Optional[str]:
        source = self._find_source(doc_id)
        if source is None or is_empty_doc(source.remarks):
            return None
        return to_markdown(source.remarks)

    def _find_source(self, doc_id: str) -> Optional[ApiEntry]:
        if self.source_index is None:
            return None
        return self.source_index.find_member(
            self.normalizer.containing_type_key(doc_id),
            self.normalizer.normalize(doc_id),
        )

    def lookup(self, interface_doc_id: str) -> Optional[str]:
        """
        Returns the remarks of an interface member, ``None`` when it has none.

        Raises KeyError when the member is in neither corpus.
        """
        key = self.normalizer.normalize(interface_doc_id)
        if key in self._snapshot:
            return self._snapshot[key]
        # Interfaces from other assemblies are usually only in the source.
        if self._find_source(interface_doc_id) is not None:
            return self._source_remarks(interface_doc_id)
        raise KeyError(interface_doc_id)

    def resolve(self, member: ApiEntry) -> str:
        if self.config.skip_interface_implementations:
            return ""

        blocks: List[str] = []
        for interface_doc_id in member.node.interface_members:
            try:
                remarks = self.lookup(interface_doc_id)
            except KeyError:
                bus.warning(
                    L.interface.unresolved,
                    member=member.doc_id,
                    interface=interface_doc_id,
                )
                continue
            if remarks:
                blocks.append(
                    BLOCK_TEMPLATE.format(
                        uid=xref_uid(interface_doc_id), remarks=remarks
                    )
                )
        return BLOCK_SEPARATOR.join(blocks)
