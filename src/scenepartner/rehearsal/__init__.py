"""Rehearsal progression: context windows, turn resolution and sessions."""

from __future__ import annotations

from .context import ContextWindow, build_context_window, window_bounds
from .controller import RehearsalController, SessionUpdate
from .session import RehearsalSession, SessionStatus, should_offer_hold
from .timers import TimerScheduler
from .turns import NextSpeaker, SpeakerType, resolve_next_speaker

__all__ = [
    "ContextWindow",
    "NextSpeaker",
    "RehearsalController",
    "RehearsalSession",
    "SessionStatus",
    "SessionUpdate",
    "SpeakerType",
    "TimerScheduler",
    "build_context_window",
    "resolve_next_speaker",
    "should_offer_hold",
    "window_bounds",
]
