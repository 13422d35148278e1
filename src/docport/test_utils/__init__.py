from .bus import SpyBus
from .helpers import create_test_app, make_config, make_entry, read_files
from .workspace import (
    CorpusFactory,
    docs_member_xml,
    docs_type_xml,
    intellisense_xml,
)

__all__ = [
    "SpyBus",
    "CorpusFactory",
    "create_test_app",
    "docs_member_xml",
    "docs_type_xml",
    "intellisense_xml",
    "make_config",
    "make_entry",
    "read_files",
]
