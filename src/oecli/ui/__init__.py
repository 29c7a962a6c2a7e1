from .console import Console, get_console, set_console
from .log_handler import ConsoleLogEventHandler
from .progress import ProgressBarsEventHandler

__all__ = [
    "Console",
    "ConsoleLogEventHandler",
    "ProgressBarsEventHandler",
    "get_console",
    "set_console",
]
