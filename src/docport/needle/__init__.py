from .pointer import L, SemanticPointer
from .runtime import needle, Needle
from .loader import MessageLoader

__all__ = ["L", "SemanticPointer", "needle", "Needle", "MessageLoader"]
