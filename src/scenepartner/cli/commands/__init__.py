"""ScenePartner CLI commands."""

from .context import context_command
from .parse import parse_command
from .rehearse import rehearse_command

__all__ = ["context_command", "parse_command", "rehearse_command"]
