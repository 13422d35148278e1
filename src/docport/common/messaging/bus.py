from typing import Any, Optional, Union

from docport.needle import SemanticPointer, needle
from .protocols import Renderer

MessageId = Union[str, SemanticPointer]


def _emitter(level: str):
    def emit(self: "MessageBus", msg_id: MessageId, **kwargs: Any) -> None:
        self._render(level, msg_id, **kwargs)

    emit.__name__ = level
    emit.__doc__ = f"Sends ``msg_id`` at the {level!r} level."
    return emit


class MessageBus:
    """Formats catalog messages and hands them to the active renderer."""

    def __init__(self, renderer: Optional[Renderer] = None):
        self._renderer = renderer

    def set_renderer(self, renderer: Optional[Renderer]) -> None:
        self._renderer = renderer

    @staticmethod
    def format(msg_id: MessageId, **kwargs: Any) -> str:
        template = needle.get(msg_id)
        try:
            return template.format_map(kwargs)
        except KeyError as exc:
            return f"<formatting_error for '{msg_id}': missing {exc}>"
        except IndexError:
            return f"<formatting_error for '{msg_id}': positional field>"

    def _render(self, level: str, msg_id: MessageId, **kwargs: Any) -> None:
        if self._renderer is None:
            return
        self._renderer.render(self.format(msg_id, **kwargs), level)

    debug = _emitter("debug")
    info = _emitter("info")
    success = _emitter("success")
    warning = _emitter("warning")
    error = _emitter("error")
