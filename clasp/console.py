# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances for Clasp output and error reporting."""
from rich.console import Console

from clasp.themes import get_nord_theme

console = Console(color_system="truecolor", theme=get_nord_theme())
error_console = Console(color_system="truecolor", theme=get_nord_theme(), stderr=True)
