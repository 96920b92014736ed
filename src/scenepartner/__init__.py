"""ScenePartner: screenplay parsing and rehearsal turn-taking.

ScenePartner turns extracted screenplay text into an ordered sequence of
structural elements and walks an actor through it, deciding at every cursor
position whether the user or an AI-voiced character speaks next.
"""

from .config import ScenePartnerSettings, get_logger, get_settings
from .exceptions import (
    DocumentDecodeError,
    InvalidTransitionError,
    ParseError,
    ScenePartnerError,
)
from .parser import Element, ElementType, ParsedScript, ScreenplayParser
from .rehearsal import (
    NextSpeaker,
    RehearsalController,
    RehearsalSession,
    SessionStatus,
    SpeakerType,
    build_context_window,
    resolve_next_speaker,
)

__version__ = "0.1.0"

__all__ = [
    "DocumentDecodeError",
    "Element",
    "ElementType",
    "InvalidTransitionError",
    "NextSpeaker",
    "ParseError",
    "ParsedScript",
    "RehearsalController",
    "RehearsalSession",
    "ScenePartnerError",
    "ScenePartnerSettings",
    "ScreenplayParser",
    "SessionStatus",
    "SpeakerType",
    "__version__",
    "build_context_window",
    "get_logger",
    "get_settings",
    "resolve_next_speaker",
]
