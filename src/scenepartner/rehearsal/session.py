"""Rehearsal session state and its pure transitions.

Every transition returns a new ``RehearsalSession``; instances are frozen.
The state graph is::

    active <-> paused
    active  -> completed
    paused  -> completed

Nothing leaves ``completed``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

from scenepartner.exceptions import InvalidTransitionError, ValidationError

DEFAULT_SILENCE_THRESHOLD_MS = 1500
DEFAULT_HOLD_THRESHOLD_MS = 5000
DEFAULT_POST_SPEECH_DELAY_MS = 500


class SessionStatus(str, Enum):
    """Lifecycle status of a rehearsal session."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class RehearsalSession:
    """One rehearsal attempt walking an actor through a parsed script."""

    user_character: str
    ai_characters: frozenset[str]
    total_elements: int
    current_line_index: int = 0
    status: SessionStatus = SessionStatus.ACTIVE
    voice_mappings: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    auto_advance: bool = True
    started_at: datetime = field(default_factory=_now)
    completed_at: datetime | None = None

    @classmethod
    def create(
        cls,
        user_character: str,
        ai_characters: Iterable[str],
        total_elements: int,
        voice_mappings: Mapping[str, str] | None = None,
        auto_advance: bool = True,
        now: datetime | None = None,
    ) -> RehearsalSession:
        """Start a session at the first element.

        Raises:
            ValidationError: If the user character is also voiced by the AI,
                or the element count is negative
        """
        ai_set = frozenset(ai_characters)
        if user_character in ai_set:
            raise ValidationError(
                message=f"'{user_character}' cannot be both the user and an AI role",
                hint="Remove the user character from the AI characters",
                details={"ai_characters": sorted(ai_set)},
            )
        if total_elements < 0:
            raise ValidationError(
                message="Element count cannot be negative",
                details={"total_elements": total_elements},
            )
        return cls(
            user_character=user_character,
            ai_characters=ai_set,
            total_elements=total_elements,
            voice_mappings=MappingProxyType(dict(voice_mappings or {})),
            auto_advance=auto_advance,
            started_at=now or _now(),
        )

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status is SessionStatus.COMPLETED

    @property
    def last_index(self) -> int:
        """Highest valid cursor; 0 for an empty script."""
        return max(self.total_elements - 1, 0)

    def voice_for(self, character: str) -> str | None:
        """Voice identifier mapped to ``character``, if any."""
        return self.voice_mappings.get(character)

    def _reject_if_completed(self, action: str) -> None:
        if self.is_completed:
            raise InvalidTransitionError(
                action=action,
                status=self.status.value,
                cursor=self.current_line_index,
            )

    def advance(self) -> RehearsalSession:
        """Move to the next element; a no-op at the last one."""
        self._reject_if_completed("advance")
        target = min(self.current_line_index + 1, self.last_index)
        if target == self.current_line_index:
            return self
        return replace(self, current_line_index=target)

    def rewind(self) -> RehearsalSession:
        """Move to the previous element; a no-op at the first one."""
        self._reject_if_completed("rewind")
        target = max(self.current_line_index - 1, 0)
        if target == self.current_line_index:
            return self
        return replace(self, current_line_index=target)

    def move_to(self, index: int) -> RehearsalSession:
        """Jump to an arbitrary element.

        Raises:
            InvalidTransitionError: If completed, or ``index`` is outside
                ``[0, total_elements)``
        """
        self._reject_if_completed("move")
        if not 0 <= index < self.total_elements:
            raise InvalidTransitionError(
                action="move",
                status=self.status.value,
                cursor=self.current_line_index,
                reason=f"Line index {index} is outside the script",
                total_elements=self.total_elements,
            )
        return replace(self, current_line_index=index)

    def pause(self) -> RehearsalSession:
        self._reject_if_completed("pause")
        if self.status is SessionStatus.PAUSED:
            return self
        return replace(self, status=SessionStatus.PAUSED)

    def resume(self) -> RehearsalSession:
        self._reject_if_completed("resume")
        if self.status is SessionStatus.ACTIVE:
            return self
        return replace(self, status=SessionStatus.ACTIVE)

    def toggle_pause(self) -> RehearsalSession:
        """Pause an active session or resume a paused one."""
        return self.resume() if self.status is SessionStatus.PAUSED else self.pause()

    def set_auto_advance(self, enabled: bool) -> RehearsalSession:
        self._reject_if_completed("set auto-advance on")
        return replace(self, auto_advance=enabled)

    def complete(self, now: datetime | None = None) -> RehearsalSession:
        """Finish the session; it is immutable afterwards."""
        self._reject_if_completed("complete")
        return replace(
            self, status=SessionStatus.COMPLETED, completed_at=now or _now()
        )

    def silence_timeout(
        self,
        elapsed_ms: float,
        threshold_ms: int = DEFAULT_SILENCE_THRESHOLD_MS,
    ) -> RehearsalSession:
        """Advance after enough user silence.

        Only an active session with auto-advance enabled moves, and only
        once ``elapsed_ms`` reaches the threshold. Anything else is a no-op,
        including a completed session.
        """
        if not self.is_active or not self.auto_advance:
            return self
        if elapsed_ms < threshold_ms:
            return self
        return self.advance()

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_character": self.user_character,
            "ai_characters": sorted(self.ai_characters),
            "current_line_index": self.current_line_index,
            "total_elements": self.total_elements,
            "session_status": self.status.value,
            "voice_mappings": dict(self.voice_mappings),
            "auto_advance": self.auto_advance,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }


def should_offer_hold(
    elapsed_ms: float, threshold_ms: int = DEFAULT_HOLD_THRESHOLD_MS
) -> bool:
    """Whether silence has run long enough to offer holding position."""
    return elapsed_ms >= threshold_ms
