from typing import Protocol


class Renderer(Protocol):
    """
    Presents a fully formatted message to the user.

    Levels are "debug", "info", "success", "warning" and "error".
    """

    def render(self, message: str, level: str) -> None: ...
