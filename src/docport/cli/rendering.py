from typing import Dict, Optional

import typer

from docport.common.messaging import protocols

_STYLES: Dict[str, Optional[str]] = {
    "debug": typer.colors.BRIGHT_BLACK,
    "info": None,
    "success": typer.colors.GREEN,
    "warning": typer.colors.YELLOW,
    "error": typer.colors.RED,
}


class CliRenderer(protocols.Renderer):
    """Colours bus messages by level; errors go to stderr."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, message: str, level: str) -> None:
        if level == "debug" and not self.verbose:
            return
        typer.secho(message, fg=_STYLES.get(level), err=level == "error")
