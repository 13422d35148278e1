from typing import List

from docport.common import bus
from docport.common.transaction import TransactionManager
from docport.config import MergeConfiguration
from docport.io import DocsCorpus, DocsWriter
from docport.needle import L
from docport.spec import ApiEntry, MergeStatus, TypeOutcome
from docport.app.services import (
    DirtyTracker,
    ExceptionMerger,
    FieldMerger,
    Matcher,
    SourceIndex,
)
from docport.app.types import PortResult


class PortRunner:
    def __init__(
        self,
        config: MergeConfiguration,
        matcher: Matcher,
        field_merger: FieldMerger,
        exception_merger: ExceptionMerger,
        tracker: DirtyTracker,
        writer: DocsWriter,
    ):
        self.config = config
        self.matcher = matcher
        self.field_merger = field_merger
        self.exception_merger = exception_merger
        self.tracker = tracker
        self.writer = writer

    def merge_type(self, index: SourceIndex, dest_type: ApiEntry) -> TypeOutcome:
        pairing = self.matcher.pair(index, dest_type)
        if not pairing.matched:
            bus.debug(L.port.type.unmatched, type=dest_type.doc_id)
            return TypeOutcome(doc_id=dest_type.doc_id, status=MergeStatus.UNMATCHED)

        outcome = TypeOutcome(
            doc_id=dest_type.doc_id,
            status=MergeStatus.NOTHING_TO_MERGE,
            skipped_members=[m.doc_id for m in pairing.skipped],
        )
        source_type = pairing.source

        report = self.field_merger.merge_type(dest_type, source_type)
        report.updated.extend(
            self.exception_merger.merge(dest_type, dest_type, source_type)
        )
        self._record(outcome, dest_type, report.updated, report.orphans)

        for member_pairing in pairing.members:
            member = member_pairing.destination
            if member_pairing.source is None:
                outcome.unmatched_members.append(member.doc_id)
                continue
            report = self.field_merger.merge_member(
                dest_type, member, member_pairing.source
            )
            report.updated.extend(
                self.exception_merger.merge(dest_type, member, member_pairing.source)
            )
            self._record(outcome, member, report.updated, report.orphans)

        if outcome.updated_fields:
            outcome.status = MergeStatus.MERGED
            bus.info(
                L.port.type.merged,
                type=dest_type.doc_id,
                count=len(outcome.updated_fields),
            )
        return outcome

    @staticmethod
    def _record(
        outcome: TypeOutcome, entry: ApiEntry, updated: List[str], orphans: List[str]
    ) -> None:
        for label in updated:
            outcome.updated_fields.append(f"{entry.doc_id}: {label}")
            bus.debug(L.port.field.updated, api=entry.doc_id, field=label)
        for label in orphans:
            outcome.orphans.append(f"{entry.doc_id}: {label}")
            bus.warning(L.port.field.orphan, api=entry.doc_id, field=label)

    def run(
        self, corpus: DocsCorpus, index: SourceIndex, tm: TransactionManager
    ) -> PortResult:
        result = PortResult()

        for dest_type in corpus.types:
            if not self.config.includes_type(dest_type.node):
                bus.debug(L.port.type.excluded, type=dest_type.doc_id)
                continue
            result.outcomes.append(self.merge_type(index, dest_type))

        dirty = self.tracker.dirty_types()
        result.dirty_types = [t.doc_id for t in dirty]

        if not self.config.save:
            if dirty:
                bus.info(L.port.run.dry_run, count=len(dirty))
            return result

        for dest_type in dirty:
            document = corpus.document_for(dest_type)
            if document is None:
                continue
            tm.add_write(document.path, self.writer.render(document))

        commit = tm.commit()
        result.written = commit.written
        result.failures = commit.failed
        for failed in commit.failed:
            bus.error(L.write.failed, path=failed.op.path, error=failed.error)
        for path in commit.written:
            bus.debug(L.write.saved, path=path)
        result.success = commit.success
        return result
