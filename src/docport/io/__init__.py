from .docs import DocsCorpus, DocsDocument, DocsLoader, DocsWriter
from .intellisense import IntelliSenseLoader
from .interfaces import SourceLoader

__all__ = [
    "DocsCorpus",
    "DocsDocument",
    "DocsLoader",
    "DocsWriter",
    "IntelliSenseLoader",
    "SourceLoader",
]
