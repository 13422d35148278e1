from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol, Union


class FileSystemAdapter(Protocol):
    def write_text(self, path: Path, content: str) -> None: ...

    def exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...


class RealFileSystem:
    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps CRLF files byte-identical on every platform.
        path.write_text(content, encoding="utf-8", newline="")

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


@dataclass
class WriteFileOp:
    path: Path
    content: str

    def execute(self, fs: FileSystemAdapter, root: Path) -> None:
        fs.write_text(root / self.path, self.content)

    def describe(self) -> str:
        return f"[WRITE] {self.path}"


@dataclass
class FailedOp:
    op: WriteFileOp
    error: OSError


@dataclass
class CommitResult:
    written: List[Path] = field(default_factory=list)
    failed: List[FailedOp] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed


class TransactionManager:
    """
    Queues file writes and applies them in one pass.

    A failing write does not stop the remaining ones; failures are returned in
    the ``CommitResult``.
    """

    def __init__(self, root_path: Path, fs: Optional[FileSystemAdapter] = None):
        self.root_path = root_path
        self.fs = fs or RealFileSystem()
        self._ops: List[WriteFileOp] = []

    def add_write(self, path: Union[str, Path], content: str) -> None:
        self._ops.append(WriteFileOp(Path(path), content))

    def preview(self) -> List[str]:
        return [op.describe() for op in self._ops]

    def commit(self) -> CommitResult:
        result = CommitResult()
        for op in self._ops:
            try:
                op.execute(self.fs, self.root_path)
            except OSError as e:
                result.failed.append(FailedOp(op=op, error=e))
            else:
                result.written.append(op.path)
        self._ops.clear()
        return result

    @property
    def pending_count(self) -> int:
        return len(self._ops)
