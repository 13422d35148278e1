import re
from difflib import SequenceMatcher
from typing import List, Optional, Tuple

from docport.config import MergeConfiguration
from docport.spec import (
    ApiEntry,
    ExceptionDoc,
    SignatureNormalizerProtocol,
    is_empty_doc,
)
from .dirty_tracker import DirtyTracker

_XML_TAG = re.compile(r"<[^>]+>")
_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_exception_text(text: Optional[str]) -> str:
    if not text:
        return ""
    text = _XML_TAG.sub(" ", text.lower())
    text = _PUNCTUATION.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def similarity(a: Optional[str], b: Optional[str]) -> float:
    """Percentage in [0, 100]; two empty texts are identical."""
    left, right = normalize_exception_text(a), normalize_exception_text(b)
    if not left and not right:
        return 100.0
    return SequenceMatcher(None, left, right).ratio() * 100


class ExceptionMerger:
    """
    Ports ``<exception>`` entries without piling up near-duplicates.

    A source exception is a duplicate of a destination exception of the same
    type when their texts are at least ``exception_collision_threshold``
    percent similar.
    """

    def __init__(
        self,
        config: MergeConfiguration,
        normalizer: SignatureNormalizerProtocol,
        tracker: DirtyTracker,
    ):
        self.config = config
        self.normalizer = normalizer
        self.tracker = tracker

    def merge(self, owner: ApiEntry, dest: ApiEntry, source: ApiEntry) -> List[str]:
        """Returns one label per added or rewritten exception."""
        updated: List[str] = []
        if not dest.docs.present:
            return updated
        existing = dest.docs.exceptions

        for incoming in source.docs.exceptions:
            if is_empty_doc(incoming.text):
                continue
            text = incoming.text.strip()
            candidates = self._same_type(existing, incoming.cref)
            documented = [e for e in candidates if not is_empty_doc(e.text)]

            best, score = self._best_match(documented, text)
            if best is not None and score >= self.config.exception_collision_threshold:
                if self.config.port_exceptions_existing and best.text != text:
                    best.text = text
                    self.tracker.mark(owner, dest)
                    updated.append(f"exception {incoming.cref}")
                continue

            # Only text that is not already documented may fill a placeholder.
            placeholder = next(
                (e for e in candidates if is_empty_doc(e.text)), None
            )
            if placeholder is not None:
                placeholder.text = text
                self.tracker.mark(owner, dest)
                updated.append(f"exception {incoming.cref}")
                continue

            if self.config.port_exceptions_new:
                existing.append(ExceptionDoc(cref=incoming.cref, text=text))
                self.tracker.mark(owner, dest)
                updated.append(f"exception {incoming.cref}")

        return updated

    def _same_type(self, existing: List[ExceptionDoc], cref: str) -> List[ExceptionDoc]:
        key = self.normalizer.normalize(cref)
        return [e for e in existing if self.normalizer.normalize(e.cref) == key]

    @staticmethod
    def _best_match(
        candidates: List[ExceptionDoc], text: str
    ) -> Tuple[Optional[ExceptionDoc], float]:
        best: Optional[ExceptionDoc] = None
        best_score = -1.0
        for candidate in candidates:
            score = similarity(candidate.text, text)
            if score > best_score:
                best, best_score = candidate, score
        return best, best_score
