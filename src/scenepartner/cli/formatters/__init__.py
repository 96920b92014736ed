"""Output formatters for ScenePartner CLI."""

from .json_formatter import JsonFormatter
from .script_formatter import ScriptFormatter

__all__ = ["JsonFormatter", "ScriptFormatter"]
