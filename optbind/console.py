# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance used as the default help writer."""
from rich.console import Console

console = Console(color_system="truecolor")
