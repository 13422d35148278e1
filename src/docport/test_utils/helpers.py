from pathlib import Path
from typing import Dict, Optional

from docport.app import DocsPorterApp
from docport.config import MergeConfiguration
from docport.spec import ApiEntry, ApiKind, ApiNode, DocFields
from docport.app.services import SignatureNormalizer


def create_test_app(root_path: Path) -> DocsPorterApp:
    return DocsPorterApp(root_path=root_path)


def make_config(**overrides) -> MergeConfiguration:
    values = {"included_assemblies": frozenset({"MyAssembly"})}
    values.update(overrides)
    return MergeConfiguration(**values)


def make_entry(
    doc_id: str,
    docs: Optional[DocFields] = None,
    members=(),
    **node_fields,
) -> ApiEntry:
    """Builds an ApiEntry whose key is the normalized ``doc_id``."""
    kind = ApiKind.TYPE if doc_id.startswith("T:") else ApiKind.MEMBER
    node_fields.setdefault("assembly", "MyAssembly")
    node = ApiNode(
        kind=kind,
        doc_id=doc_id,
        key=SignatureNormalizer().normalize(doc_id),
        **node_fields,
    )
    return ApiEntry(node=node, docs=docs or DocFields(), members=list(members))


def read_files(root: Path, pattern: str = "**/*.xml") -> Dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.glob(pattern))
    }
