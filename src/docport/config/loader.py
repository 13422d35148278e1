import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from docport.spec import ApiNode, DocField
from .exceptions import InvalidSettingError, MissingSettingError, ConfigurationError

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

LIST_SEPARATOR = ","


@dataclass(frozen=True)
class MergeConfiguration:
    docs_dirs: Tuple[Path, ...] = ()
    intellisense_dirs: Tuple[Path, ...] = ()
    included_assemblies: FrozenSet[str] = frozenset()
    excluded_assemblies: FrozenSet[str] = frozenset()
    included_namespaces: FrozenSet[str] = frozenset()
    excluded_namespaces: FrozenSet[str] = frozenset()
    included_types: FrozenSet[str] = frozenset()
    excluded_types: FrozenSet[str] = frozenset()
    skip_interface_implementations: bool = False
    skip_interface_remarks: bool = True
    port_type_remarks: bool = True
    port_member_remarks: bool = True
    port_exceptions_existing: bool = False
    port_exceptions_new: bool = True
    exception_collision_threshold: int = 70
    overwrite_fields: FrozenSet[DocField] = frozenset()
    save: bool = False
    print_undoc: bool = False

    def includes_assembly(self, assembly: str) -> bool:
        if any(assembly.startswith(a) for a in self.excluded_assemblies):
            return False
        return any(assembly.startswith(a) for a in self.included_assemblies)

    def includes_type(self, node: ApiNode) -> bool:
        if not self.includes_assembly(node.assembly):
            return False

        namespace = node.namespace
        if any(namespace.startswith(ns) for ns in self.excluded_namespaces):
            return False
        if self.included_namespaces and not any(
            namespace.startswith(ns) for ns in self.included_namespaces
        ):
            return False

        full_name = f"{namespace}.{node.name}" if namespace else node.name
        if node.name in self.excluded_types or full_name in self.excluded_types:
            return False
        if self.included_types:
            return node.name in self.included_types or full_name in self.included_types
        return True


_BOOL_SETTINGS = (
    "skip_interface_implementations",
    "skip_interface_remarks",
    "port_type_remarks",
    "port_member_remarks",
    "port_exceptions_existing",
    "port_exceptions_new",
    "save",
    "print_undoc",
)
_SET_SETTINGS = (
    "included_assemblies",
    "excluded_assemblies",
    "included_namespaces",
    "excluded_namespaces",
    "included_types",
    "excluded_types",
)
_PATH_SETTINGS = ("docs_dirs", "intellisense_dirs")
_KNOWN_SETTINGS = frozenset(
    _BOOL_SETTINGS
    + _SET_SETTINGS
    + _PATH_SETTINGS
    + ("exception_collision_threshold", "overwrite_fields")
)


def find_pyproject_toml(search_path: Path) -> Optional[Path]:
    current_dir = search_path.resolve()
    while True:
        candidate = current_dir / "pyproject.toml"
        if candidate.is_file():
            return candidate
        if current_dir.parent == current_dir:
            return None
        current_dir = current_dir.parent


def load_config_from_path(search_path: Path) -> Tuple[Dict[str, Any], Path]:
    """
    Reads the ``[tool.docport]`` table of the nearest pyproject.toml.

    Returns the raw settings and the directory relative paths resolve against.
    """
    config_path = find_pyproject_toml(search_path)
    if config_path is None:
        return {}, search_path.resolve()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Could not parse {config_path}: {e}") from e

    settings = data.get("tool", {}).get("docport", {})
    if not isinstance(settings, dict):
        raise InvalidSettingError("tool.docport", settings, "expected a table")
    return settings, config_path.parent


def _split_list(setting: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        items: Iterable[Any] = value.split(LIST_SEPARATOR)
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        raise InvalidSettingError(setting, value, "expected a list of strings")

    result = []
    for item in items:
        if not isinstance(item, str):
            raise InvalidSettingError(setting, value, "expected a list of strings")
        item = item.strip()
        if item:
            result.append(item)
    return tuple(result)


def _to_dirs(setting: str, value: Any, base_path: Path) -> Tuple[Path, ...]:
    dirs = []
    for raw in _split_list(setting, value):
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = base_path / path
        if not path.is_dir():
            raise InvalidSettingError(setting, raw, "directory does not exist")
        dirs.append(path)
    return tuple(dirs)


def _to_threshold(value: Any) -> int:
    setting = "exception_collision_threshold"
    if isinstance(value, bool):
        raise InvalidSettingError(setting, value, "expected an integer")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as e:
            raise InvalidSettingError(setting, value, "expected an integer") from e
    if not isinstance(value, int):
        raise InvalidSettingError(setting, value, "expected an integer")
    if not 0 <= value <= 100:
        raise InvalidSettingError(setting, value, "must be between 0 and 100")
    return value


def _to_fields(value: Any) -> FrozenSet[DocField]:
    fields = set()
    for raw in _split_list("overwrite_fields", value):
        try:
            fields.add(DocField(raw.lower()))
        except ValueError as e:
            allowed = ", ".join(f.value for f in DocField)
            raise InvalidSettingError(
                "overwrite_fields", raw, f"expected one of {allowed}"
            ) from e
    return frozenset(fields)


def build_configuration(
    settings: Mapping[str, Any],
    base_path: Path,
    require_intellisense: bool = True,
) -> MergeConfiguration:
    """
    Validates raw settings and freezes them into a MergeConfiguration.

    ``settings`` is the merge of the pyproject table and command line
    overrides; ``None`` values mean "not set".
    """
    values = {k: v for k, v in settings.items() if v is not None}

    unknown = sorted(set(values) - _KNOWN_SETTINGS)
    if unknown:
        raise ConfigurationError(f"Unknown setting(s): {', '.join(unknown)}")

    kwargs: Dict[str, Any] = {}
    for name in _BOOL_SETTINGS:
        if name in values:
            if not isinstance(values[name], bool):
                raise InvalidSettingError(name, values[name], "expected a boolean")
            kwargs[name] = values[name]

    for name in _SET_SETTINGS:
        kwargs[name] = frozenset(_split_list(name, values.get(name)))

    kwargs["docs_dirs"] = _to_dirs("docs_dirs", values.get("docs_dirs"), base_path)
    kwargs["intellisense_dirs"] = _to_dirs(
        "intellisense_dirs", values.get("intellisense_dirs"), base_path
    )

    if "exception_collision_threshold" in values:
        kwargs["exception_collision_threshold"] = _to_threshold(
            values["exception_collision_threshold"]
        )
    kwargs["overwrite_fields"] = _to_fields(values.get("overwrite_fields"))

    if not kwargs["docs_dirs"]:
        raise MissingSettingError(
            "docs_dirs", "Point it at the folder holding the Docs xml files."
        )
    if require_intellisense and not kwargs["intellisense_dirs"]:
        raise MissingSettingError(
            "intellisense_dirs",
            "Point it at one or more folders holding IntelliSense xml files.",
        )
    if not kwargs["included_assemblies"]:
        raise MissingSettingError(
            "included_assemblies", "Specify at least one assembly to port."
        )

    return MergeConfiguration(**kwargs)
