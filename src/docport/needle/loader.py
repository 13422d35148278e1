import json
from pathlib import Path
from typing import Dict

CATALOG_SUFFIX = ".json"


class MessageLoader:
    """Reads flat ``{"key": "template"}`` JSON catalogs from a directory tree."""

    def _merge_file(self, path: Path, registry: Dict[str, str]) -> None:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except (OSError, ValueError):
            # A broken catalog only loses its own keys; lookups fall back
            # to the pointer text.
            return
        if isinstance(content, dict):
            for key, value in content.items():
                registry[str(key)] = str(value)

    def load_directory(self, root_path: Path) -> Dict[str, str]:
        registry: Dict[str, str] = {}
        if not root_path.is_dir():
            return registry

        # Sorted so that overlapping keys resolve the same way on every platform.
        catalogs = sorted(
            p for p in root_path.rglob(f"*{CATALOG_SUFFIX}") if p.is_file()
        )
        for file_path in catalogs:
            self._merge_file(file_path, registry)
        return registry
