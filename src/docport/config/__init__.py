from .exceptions import ConfigurationError, InvalidSettingError, MissingSettingError
from .loader import (
    MergeConfiguration,
    build_configuration,
    find_pyproject_toml,
    load_config_from_path,
)

__all__ = [
    "ConfigurationError",
    "InvalidSettingError",
    "MissingSettingError",
    "MergeConfiguration",
    "build_configuration",
    "find_pyproject_toml",
    "load_config_from_path",
]
