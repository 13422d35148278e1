from typing import Any


class SemanticPointer:
    """
    A dotted message address built by attribute access.

    ``L.port.run.complete`` resolves to the catalog key ``"port.run.complete"``;
    ``L.undoc.section["param"]`` does the same for segments chosen at runtime.
    """

    __slots__ = ("_parts",)

    def __init__(self, *parts: str):
        segments = (s for p in parts for s in p.split("."))
        object.__setattr__(self, "_parts", tuple(s for s in segments if s))

    def __getattr__(self, name: str) -> "SemanticPointer":
        # Private and dunder names (copy, pickle, mock) never become keys.
        if name.startswith("_"):
            raise AttributeError(name)
        return SemanticPointer(*self._parts, name)

    def __getitem__(self, key: str) -> "SemanticPointer":
        return SemanticPointer(*self._parts, str(key))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("SemanticPointer is immutable")

    def __str__(self) -> str:
        return ".".join(self._parts)

    def __repr__(self) -> str:
        return f"L.{self}" if self._parts else "L"

    def __eq__(self, other: Any) -> bool:
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))


L = SemanticPointer()
