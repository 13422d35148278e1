from pathlib import Path

from docport.needle import needle
from .messaging.bus import MessageBus

# Packaged catalogs live under assets/needle/<lang>; project overrides under
# <project>/.docport/needle/<lang> take precedence.
needle.add_root(Path(__file__).parent / "assets")

bus = MessageBus()

__all__ = ["bus", "needle", "MessageBus"]
