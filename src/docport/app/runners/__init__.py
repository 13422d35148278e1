from .port import PortRunner
from .undoc import UndocumentedReporter

__all__ = ["PortRunner", "UndocumentedReporter"]
