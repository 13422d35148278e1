from pathlib import Path
from typing import Iterable, List, Protocol

from docport.spec import ApiEntry


class SourceLoader(Protocol):
    """Reads the corpus documentation is ported from."""

    def load(self, dirs: Iterable[Path]) -> List[ApiEntry]: ...
