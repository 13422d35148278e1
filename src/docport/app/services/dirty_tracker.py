from typing import Dict, List, Optional

from docport.spec import ApiEntry


class DirtyTracker:
    """
    Records which destination types were mutated during a run.

    Marking a member marks its owning type too, so the writer only needs to
    look at types.
    """

    def __init__(self) -> None:
        self._types: Dict[str, ApiEntry] = {}

    def mark(self, owner: ApiEntry, entry: Optional[ApiEntry] = None) -> None:
        if entry is not None:
            entry.docs.changed = True
        owner.docs.changed = True
        self._types[owner.doc_id] = owner

    def is_dirty(self, owner: ApiEntry) -> bool:
        return owner.doc_id in self._types

    def dirty_types(self) -> List[ApiEntry]:
        return [self._types[doc_id] for doc_id in sorted(self._types)]

    def __len__(self) -> int:
        return len(self._types)
