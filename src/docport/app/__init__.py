from .core import DocsPorterApp
from .types import PortResult, UndocReport

__all__ = ["DocsPorterApp", "PortResult", "UndocReport"]
