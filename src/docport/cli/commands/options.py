from typing import List, Optional

import typer

from docport.common import needle
from docport.needle import L


def list_option(*names: str, key):
    return typer.Option(None, *names, help=needle.get(key))


def flag_option(spec: str, key):
    return typer.Option(None, spec, help=needle.get(key), show_default=False)


def split_csv(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


DOCS = list_option("--docs", "-d", key=L.cli.option.docs.help)
INTELLISENSE = list_option("--intellisense", "-i", key=L.cli.option.intellisense.help)
INCLUDE_ASSEMBLIES = list_option(
    "--include-assemblies", key=L.cli.option.include_assemblies.help
)
EXCLUDE_ASSEMBLIES = list_option(
    "--exclude-assemblies", key=L.cli.option.exclude_assemblies.help
)
INCLUDE_NAMESPACES = list_option(
    "--include-namespaces", key=L.cli.option.include_namespaces.help
)
EXCLUDE_NAMESPACES = list_option(
    "--exclude-namespaces", key=L.cli.option.exclude_namespaces.help
)
INCLUDE_TYPES = list_option("--include-types", key=L.cli.option.include_types.help)
EXCLUDE_TYPES = list_option("--exclude-types", key=L.cli.option.exclude_types.help)
