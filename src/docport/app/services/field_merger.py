from dataclasses import dataclass, field
from typing import Dict, List, Optional

from docport.config import MergeConfiguration
from docport.spec import (
    ApiEntry,
    DocField,
    InterfaceRemarksProtocol,
    is_empty_doc,
)
from docport.common.formatting import to_markdown, xref_uid
from .dirty_tracker import DirtyTracker
from .interface_remarks import BLOCK_SEPARATOR

EII_TEMPLATE = (
    "This member is an explicit interface member implementation. "
    "It can be used only when the <xref:{type}> instance is cast to an "
    "<xref:{interface}> interface."
)


def interface_type_uid(member_doc_id: str) -> str:
    """``M:System.IDisposable.Dispose`` -> ``System.IDisposable``."""
    name = xref_uid(member_doc_id).split("(", 1)[0]
    return name.rsplit(".", 1)[0]


@dataclass
class MergeReport:
    updated: List[str] = field(default_factory=list)
    orphans: List[str] = field(default_factory=list)

    def extend(self, other: "MergeReport") -> None:
        self.updated.extend(other.updated)
        self.orphans.extend(other.orphans)


class FieldMerger:
    """
    Copies source documentation into empty destination fields.

    A destination field is only replaced when it is empty (blank or the
    placeholder) or when it is listed in ``overwrite_fields``. Elements missing
    from the destination are never created.
    """

    def __init__(
        self,
        config: MergeConfiguration,
        resolver: InterfaceRemarksProtocol,
        tracker: DirtyTracker,
    ):
        self.config = config
        self.resolver = resolver
        self.tracker = tracker

    def merge_type(self, dest: ApiEntry, source: ApiEntry) -> MergeReport:
        report = MergeReport()
        docs, incoming = dest.docs, source.docs

        self._merge_scalar(dest, dest, DocField.SUMMARY, incoming.summary, report)
        if self.config.port_type_remarks:
            self._merge_scalar(
                dest, dest, DocField.REMARKS, to_markdown(incoming.remarks), report
            )
        # Delegates document their invoke signature on the type.
        self._merge_scalar(dest, dest, DocField.RETURNS, incoming.returns, report)
        self._merge_named(
            dest, dest, DocField.TYPEPARAM, docs.typeparams, incoming.typeparams, report
        )
        self._merge_named(
            dest, dest, DocField.PARAM, docs.params, incoming.params, report
        )
        return report

    def merge_member(
        self, owner: ApiEntry, dest: ApiEntry, source: ApiEntry
    ) -> MergeReport:
        report = MergeReport()
        docs, incoming = dest.docs, source.docs

        self._merge_scalar(owner, dest, DocField.SUMMARY, incoming.summary, report)
        if self.config.port_member_remarks:
            self._merge_scalar(
                owner,
                dest,
                DocField.REMARKS,
                self.compose_remarks(owner, dest, source),
                report,
            )
        self._merge_scalar(owner, dest, DocField.RETURNS, incoming.returns, report)

        value = incoming.value
        if is_empty_doc(value) and dest.node.member_type == "Property":
            value = incoming.returns
        self._merge_scalar(owner, dest, DocField.VALUE, value, report)

        self._merge_named(
            owner,
            dest,
            DocField.TYPEPARAM,
            docs.typeparams,
            incoming.typeparams,
            report,
        )
        self._merge_named(
            owner, dest, DocField.PARAM, docs.params, incoming.params, report
        )
        return report

    def compose_remarks(self, owner: ApiEntry, dest: ApiEntry, source: ApiEntry) -> str:
        """
        Builds the remarks a member should receive.

        Source remarks come first, then the explicit implementation note, then
        one block per implemented interface member.
        """
        parts = []
        own = to_markdown(source.remarks)
        if own:
            parts.append(own)

        node = dest.node
        if node.implements_interface:
            if (
                node.is_explicit_implementation
                and not self.config.skip_interface_implementations
            ):
                parts.append(
                    EII_TEMPLATE.format(
                        type=xref_uid(owner.doc_id),
                        interface=interface_type_uid(node.interface_members[0]),
                    )
                )
            if not self.config.skip_interface_remarks:
                block = self.resolver.resolve(dest)
                if block:
                    parts.append(block)

        return BLOCK_SEPARATOR.join(parts)

    def _should_replace(
        self, name: DocField, current: Optional[str], incoming: Optional[str]
    ) -> bool:
        if current is None or is_empty_doc(incoming):
            return False
        if is_empty_doc(current):
            return True
        return name in self.config.overwrite_fields and current != incoming

    def _merge_scalar(
        self,
        owner: ApiEntry,
        dest: ApiEntry,
        name: DocField,
        incoming: Optional[str],
        report: MergeReport,
    ) -> None:
        current = getattr(dest.docs, name.value)
        if incoming is not None:
            incoming = incoming.strip()
        if not self._should_replace(name, current, incoming):
            return
        setattr(dest.docs, name.value, incoming)
        self.tracker.mark(owner, dest)
        report.updated.append(name.value)

    def _merge_named(
        self,
        owner: ApiEntry,
        dest: ApiEntry,
        name: DocField,
        current: Dict[str, str],
        incoming: Dict[str, str],
        report: MergeReport,
    ) -> None:
        # Names are matched exactly; the destination decides which exist.
        for item, text in incoming.items():
            if item not in current:
                report.orphans.append(f"{name.value} '{item}'")
                continue
            text = text.strip()
            if not self._should_replace(name, current[item], text):
                continue
            current[item] = text
            self.tracker.mark(owner, dest)
            report.updated.append(f"{name.value} '{item}'")
