import os
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from .loader import MessageLoader
from .pointer import SemanticPointer

LANG_ENV_VAR = "DOCPORT_LANG"


def find_project_root(start_dir: Optional[Path] = None) -> Path:
    """Walks up from ``start_dir`` looking for pyproject.toml or .git."""
    origin = (start_dir or Path.cwd()).resolve()
    current = origin
    while current.parent != current:
        if (current / "pyproject.toml").is_file() or (current / ".git").is_dir():
            return current
        current = current.parent
    return origin


class Needle:
    """
    Resolves semantic pointers to message templates.

    Each root may contribute ``needle/<lang>/`` (packaged catalogs) and
    ``.docport/needle/<lang>/`` (project overrides). Roots later in the list
    override earlier ones.
    """

    def __init__(self, roots: Optional[List[Path]] = None):
        self.default_lang = "en"
        self.roots: List[Path] = list(roots) if roots else [find_project_root()]
        self._loader = MessageLoader()
        self._registry: Dict[str, Dict[str, str]] = {}
        self._loaded_langs: Set[str] = set()

    def add_root(self, path: Path) -> None:
        """Prepends a root, so it acts as the lowest-priority default."""
        if path in self.roots:
            return
        self.roots.insert(0, path)
        self._registry.clear()
        self._loaded_langs.clear()

    def _ensure_lang_loaded(self, lang: str) -> None:
        if lang in self._loaded_langs:
            return

        merged: Dict[str, str] = {}
        for root in self.roots:
            merged.update(self._loader.load_directory(root / "needle" / lang))
            merged.update(
                self._loader.load_directory(root / ".docport" / "needle" / lang)
            )

        self._registry[lang] = merged
        self._loaded_langs.add(lang)

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        """
        Looks the key up in the requested language, then in the default
        language, and finally returns the key itself.
        """
        key = str(pointer)
        target_lang = lang or os.getenv(LANG_ENV_VAR, self.default_lang)

        self._ensure_lang_loaded(target_lang)
        value = self._registry[target_lang].get(key)
        if value is not None:
            return value

        if target_lang != self.default_lang:
            self._ensure_lang_loaded(self.default_lang)
            value = self._registry[self.default_lang].get(key)
            if value is not None:
                return value

        return key


needle = Needle()
