from typing import Optional

import typer

from docport.common import bus, needle
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
    INTELLISENSE,
    flag_option,
    list_option,
    split_csv,
)


def port_command(
    docs: Optional[str] = DOCS,
    intellisense: Optional[str] = INTELLISENSE,
    include_assemblies: Optional[str] = INCLUDE_ASSEMBLIES,
    exclude_assemblies: Optional[str] = EXCLUDE_ASSEMBLIES,
    include_namespaces: Optional[str] = INCLUDE_NAMESPACES,
    exclude_namespaces: Optional[str] = EXCLUDE_NAMESPACES,
    include_types: Optional[str] = INCLUDE_TYPES,
    exclude_types: Optional[str] = EXCLUDE_TYPES,
    overwrite_fields: Optional[str] = list_option(
        "--overwrite-fields", key=L.cli.option.overwrite_fields.help
    ),
    threshold: Optional[int] = typer.Option(
        None,
        "--exception-collision-threshold",
        "-t",
        help=needle.get(L.cli.option.threshold.help),
    ),
    skip_interface_implementations: Optional[bool] = flag_option(
        "--skip-interface-implementations/--port-interface-implementations",
        L.cli.option.skip_interface_implementations.help,
    ),
    skip_interface_remarks: Optional[bool] = flag_option(
        "--skip-interface-remarks/--port-interface-remarks",
        L.cli.option.skip_interface_remarks.help,
    ),
    port_type_remarks: Optional[bool] = flag_option(
        "--port-type-remarks/--no-port-type-remarks",
        L.cli.option.port_type_remarks.help,
    ),
    port_member_remarks: Optional[bool] = flag_option(
        "--port-member-remarks/--no-port-member-remarks",
        L.cli.option.port_member_remarks.help,
    ),
    port_exceptions_existing: Optional[bool] = flag_option(
        "--port-exceptions-existing/--no-port-exceptions-existing",
        L.cli.option.port_exceptions_existing.help,
    ),
    port_exceptions_new: Optional[bool] = flag_option(
        "--port-exceptions-new/--no-port-exceptions-new",
        L.cli.option.port_exceptions_new.help,
    ),
    save: Optional[bool] = flag_option("--save/--dry-run", L.cli.option.save.help),
    print_undoc: Optional[bool] = flag_option(
        "--print-undoc/--no-print-undoc", L.cli.option.print_undoc.help
    ),
):
    app_instance = make_app()
    overrides = {
        "docs_dirs": split_csv(docs),
        "intellisense_dirs": split_csv(intellisense),
        "included_assemblies": split_csv(include_assemblies),
        "excluded_assemblies": split_csv(exclude_assemblies),
        "included_namespaces": split_csv(include_namespaces),
        "excluded_namespaces": split_csv(exclude_namespaces),
        "included_types": split_csv(include_types),
        "excluded_types": split_csv(exclude_types),
        "overwrite_fields": split_csv(overwrite_fields),
        "exception_collision_threshold": threshold,
        "skip_interface_implementations": skip_interface_implementations,
        "skip_interface_remarks": skip_interface_remarks,
        "port_type_remarks": port_type_remarks,
        "port_member_remarks": port_member_remarks,
        "port_exceptions_existing": port_exceptions_existing,
        "port_exceptions_new": port_exceptions_new,
        "save": save,
        "print_undoc": print_undoc,
    }

    try:
        config = app_instance.load_configuration(overrides)
    except ConfigurationError as e:
        bus.error(L.config.error, error=e)
        raise typer.Exit(code=1)

    result = app_instance.run_port(config)
    if not result.success:
        raise typer.Exit(code=1)
