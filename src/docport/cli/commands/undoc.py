from typing import Optional

import typer

from docport.common import bus
from docport.config import ConfigurationError
from docport.needle import L
from docport.cli.factories import make_app
from .options import (
    DOCS,
    EXCLUDE_ASSEMBLIES,
    EXCLUDE_NAMESPACES,
    EXCLUDE_TYPES,
    INCLUDE_ASSEMBLIES,
    INCLUDE_NAMESPACES,
    INCLUDE_TYPES,
    split_csv,
)


def undoc_command(
    docs: Optional[str] = DOCS,
    include_assemblies: Optional[str] = INCLUDE_ASSEMBLIES,
    exclude_assemblies: Optional[str] = EXCLUDE_ASSEMBLIES,
    include_namespaces: Optional[str] = INCLUDE_NAMESPACES,
    exclude_namespaces: Optional[str] = EXCLUDE_NAMESPACES,
    include_types: Optional[str] = INCLUDE_TYPES,
    exclude_types: Optional[str] = EXCLUDE_TYPES,
):
    app_instance = make_app()
    overrides = {
        "docs_dirs": split_csv(docs),
        "included_assemblies": split_csv(include_assemblies),
        "excluded_assemblies": split_csv(exclude_assemblies),
        "included_namespaces": split_csv(include_namespaces),
        "excluded_namespaces": split_csv(exclude_namespaces),
        "included_types": split_csv(include_types),
        "excluded_types": split_csv(exclude_types),
    }

    try:
        config = app_instance.load_configuration(
            overrides, require_intellisense=False
        )
    except ConfigurationError as e:
        bus.error(L.config.error, error=e)
        raise typer.Exit(code=1)

    app_instance.run_undoc(config)
