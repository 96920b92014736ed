"""CLI utilities."""

from .cli_handler import CLIHandler
from .script_loader import load_script, resolve_roles

__all__ = ["CLIHandler", "load_script", "resolve_roles"]
