from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from docport.common.transaction import FailedOp
from docport.spec import MergeStatus, TypeOutcome


@dataclass
class PortResult:
    success: bool = True
    outcomes: List[TypeOutcome] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    failures: List[FailedOp] = field(default_factory=list)
    dirty_types: List[str] = field(default_factory=list)

    def count(self, status: MergeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def merged_count(self) -> int:
        return self.count(MergeStatus.MERGED)

    @property
    def nothing_to_merge_count(self) -> int:
        return self.count(MergeStatus.NOTHING_TO_MERGE)

    @property
    def unmatched_count(self) -> int:
        return self.count(MergeStatus.UNMATCHED)

    @property
    def orphan_count(self) -> int:
        return sum(len(o.orphans) for o in self.outcomes)

    @property
    def unmatched_member_count(self) -> int:
        return sum(len(o.unmatched_members) for o in self.outcomes)


@dataclass
class UndocReport:
    """Destination entries whose fields are still empty after a run."""

    summaries: List[str] = field(default_factory=list)
    remarks: List[str] = field(default_factory=list)
    returns: List[str] = field(default_factory=list)
    values: List[str] = field(default_factory=list)
    params: List[str] = field(default_factory=list)
    typeparams: List[str] = field(default_factory=list)
    exceptions: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.summaries)
            + len(self.remarks)
            + len(self.returns)
            + len(self.values)
            + len(self.params)
            + len(self.typeparams)
            + len(self.exceptions)
        )
