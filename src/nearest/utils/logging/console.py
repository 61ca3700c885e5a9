"""The shared rich console."""

from rich.console import Console

console = Console()
