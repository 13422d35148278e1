from typing import Iterable

from docport.common import bus
from docport.config import MergeConfiguration
from docport.needle import L
from docport.spec import ApiEntry, is_empty_doc
from docport.app.types import UndocReport


class UndocumentedReporter:
    """
    Lists destination entries that still carry empty documentation.

    The reporter only reads the tree; it never marks anything as changed.
    """

    def __init__(self, config: MergeConfiguration):
        self.config = config

    def collect(self, types: Iterable[ApiEntry]) -> UndocReport:
        report = UndocReport()
        for dest_type in types:
            if not self.config.includes_type(dest_type.node):
                continue
            self._check(dest_type, report)
            for member in dest_type.members:
                self._check(member, report)
        return report

    @staticmethod
    def _check(entry: ApiEntry, report: UndocReport) -> None:
        docs = entry.docs
        # A missing <summary> counts as undocumented too.
        if is_empty_doc(docs.summary):
            report.summaries.append(entry.doc_id)
        if docs.remarks is not None and is_empty_doc(docs.remarks):
            report.remarks.append(entry.doc_id)
        if docs.returns is not None and is_empty_doc(docs.returns):
            report.returns.append(entry.doc_id)
        if docs.value is not None and is_empty_doc(docs.value):
            report.values.append(entry.doc_id)
        for name, text in docs.params.items():
            if is_empty_doc(text):
                report.params.append(f"{entry.doc_id} ({name})")
        for name, text in docs.typeparams.items():
            if is_empty_doc(text):
                report.typeparams.append(f"{entry.doc_id} ({name})")
        for exc in docs.exceptions:
            if is_empty_doc(exc.text):
                report.exceptions.append(f"{entry.doc_id} ({exc.cref})")

    def render(self, report: UndocReport) -> None:
        sections = (
            ("summary", report.summaries),
            ("remarks", report.remarks),
            ("returns", report.returns),
            ("value", report.values),
            ("param", report.params),
            ("typeparam", report.typeparams),
            ("exception", report.exceptions),
        )
        for name, items in sections:
            if not items:
                continue
            bus.warning(L.undoc.section[name], count=len(items))
            for item in items:
                bus.info(L.undoc.item, api=item)

        if report.total:
            bus.warning(L.undoc.total, count=report.total)
        else:
            bus.success(L.undoc.clean)

    def run(self, types: Iterable[ApiEntry]) -> UndocReport:
        report = self.collect(types)
        self.render(report)
        return report
