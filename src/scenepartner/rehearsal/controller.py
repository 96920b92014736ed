"""Rehearsal controller applying session transitions for one rehearsal.

The controller is the single writer of a session. Transitions run under a
lock so concurrent requests never observe a half-applied state, and voice
transport events are turned into named timers that call back into the same
transition path. Requests may arrive on any thread; timer callbacks always
run on the scheduler's event loop.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from scenepartner.config import ScenePartnerSettings, get_logger, get_settings
from scenepartner.exceptions import InvalidTransitionError
from scenepartner.parser.models import Element
from scenepartner.rehearsal.context import ContextWindow, build_context_window
from scenepartner.rehearsal.session import RehearsalSession, SessionStatus
from scenepartner.rehearsal.timers import (
    HOLD_TIMER,
    POST_SPEECH_TIMER,
    SILENCE_TIMER,
    TimerScheduler,
)
from scenepartner.rehearsal.turns import NextSpeaker, resolve_next_speaker

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionUpdate:
    """Snapshot delivered to listeners after every cursor move."""

    session: RehearsalSession
    window: ContextWindow
    next_speaker: NextSpeaker

    def to_dict(self) -> dict[str, Any]:
        return {
            "session": self.session.to_dict(),
            "next_speaker": self.next_speaker.to_dict(),
            "current_window": self.window.to_dict(),
        }


UpdateListener = Callable[[SessionUpdate], None]


class RehearsalController:
    """Drive one rehearsal session over a parsed element sequence."""

    def __init__(
        self,
        elements: Sequence[Element],
        session: RehearsalSession,
        settings: ScenePartnerSettings | None = None,
        scheduler: TimerScheduler | None = None,
        listener: UpdateListener | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            elements: Parsed element sequence the session walks through
            session: Initial session state
            settings: Configuration settings, global settings if not provided
            scheduler: Timer scheduler, a new one on the running loop if omitted
            listener: Called with a SessionUpdate after every cursor move
        """
        self.elements = tuple(elements)
        self.settings = settings or get_settings()
        self.scheduler = scheduler or TimerScheduler()
        self.listener = listener
        self._session = session
        self._lock = threading.Lock()
        self._hold_offered = False
        self._ai_speaking = False

    @classmethod
    def start(
        cls,
        elements: Sequence[Element],
        user_character: str,
        ai_characters: Sequence[str],
        voice_mappings: dict[str, str] | None = None,
        settings: ScenePartnerSettings | None = None,
        scheduler: TimerScheduler | None = None,
        listener: UpdateListener | None = None,
    ) -> RehearsalController:
        """Create a fresh session at the first element and wrap it."""
        settings = settings or get_settings()
        session = RehearsalSession.create(
            user_character=user_character,
            ai_characters=ai_characters,
            total_elements=len(elements),
            voice_mappings=voice_mappings,
            auto_advance=settings.auto_advance,
        )
        logger.info(
            "Rehearsal session created",
            user_character=user_character,
            ai_characters=sorted(session.ai_characters),
            total_elements=len(elements),
        )
        return cls(elements, session, settings, scheduler, listener)

    @property
    def session(self) -> RehearsalSession:
        return self._session

    @property
    def hold_offered(self) -> bool:
        """Whether the hold-position affordance should currently be shown."""
        return self._hold_offered

    @property
    def ai_speaking(self) -> bool:
        return self._ai_speaking

    def context_window(self) -> ContextWindow:
        return build_context_window(
            self.elements,
            self._session.current_line_index,
            lookback=self.settings.context_lookback,
            lookahead=self.settings.context_lookahead,
        )

    def next_speaker(self) -> NextSpeaker:
        session = self._session
        return resolve_next_speaker(
            self.elements,
            session.current_line_index,
            session.user_character,
            session.ai_characters,
        )

    def snapshot(self) -> SessionUpdate:
        """Current session with its freshly computed window and next speaker."""
        return SessionUpdate(
            session=self._session,
            window=self.context_window(),
            next_speaker=self.next_speaker(),
        )

    def _apply(
        self, action: str, transition: Callable[[RehearsalSession], RehearsalSession]
    ) -> RehearsalSession:
        """Run ``transition`` atomically and notify on cursor moves."""
        update: SessionUpdate | None = None
        with self._lock:
            before = self._session
            try:
                after = transition(before)
            except InvalidTransitionError as e:
                logger.warning(
                    "Session transition rejected",
                    action=action,
                    status=before.status.value,
                    cursor=before.current_line_index,
                    reason=e.message,
                )
                raise
            self._session = after
            moved = after.current_line_index != before.current_line_index
            if moved:
                self._reset_silence_state()
                self.scheduler.cancel(POST_SPEECH_TIMER)
                update = self.snapshot()
            logger.debug(
                "Session transition applied",
                action=action,
                status=after.status.value,
                cursor=after.current_line_index,
            )

        if update is not None and self.listener is not None:
            self.listener(update)
        return after

    def _reset_silence_state(self) -> None:
        self.scheduler.cancel(SILENCE_TIMER)
        self.scheduler.cancel(HOLD_TIMER)
        self._hold_offered = False

    # Request-driven transitions

    def advance(self) -> RehearsalSession:
        return self._apply("advance", RehearsalSession.advance)

    def rewind(self) -> RehearsalSession:
        return self._apply("rewind", RehearsalSession.rewind)

    def move_to(self, index: int) -> RehearsalSession:
        return self._apply("move", lambda s: s.move_to(index))

    def pause(self) -> RehearsalSession:
        session = self._apply("pause", RehearsalSession.pause)
        self.scheduler.cancel(POST_SPEECH_TIMER)
        return session

    def resume(self) -> RehearsalSession:
        return self._apply("resume", RehearsalSession.resume)

    def toggle_pause(self) -> RehearsalSession:
        if self._session.status is SessionStatus.PAUSED:
            return self.resume()
        return self.pause()

    def set_auto_advance(self, enabled: bool) -> RehearsalSession:
        return self._apply(
            "set_auto_advance", lambda s: s.set_auto_advance(enabled)
        )

    def complete(self) -> RehearsalSession:
        session = self._apply("complete", RehearsalSession.complete)
        self.close()
        logger.info(
            "Rehearsal session completed",
            cursor=session.current_line_index,
            total_elements=session.total_elements,
        )
        return session

    def silence_timeout(self, elapsed_ms: float) -> RehearsalSession:
        threshold = self.settings.silence_threshold_ms
        return self._apply(
            "silence_timeout", lambda s: s.silence_timeout(elapsed_ms, threshold)
        )

    def hold_position(self) -> None:
        """Accept the hold affordance: stay on the current line.

        Pending silence handling is dropped so the cursor does not advance
        until the user speaks again.
        """
        self._reset_silence_state()
        logger.debug("Holding position", cursor=self._session.current_line_index)

    def close(self) -> None:
        """Cancel every pending timer."""
        self.scheduler.cancel_all()

    # Voice transport events

    def on_speech_started(self) -> None:
        """User began speaking: drop pending silence handling."""
        self._reset_silence_state()

    def on_speech_stopped(self) -> None:
        """User went quiet: arm the silence and hold timers."""
        if self._session.is_completed:
            return
        self.scheduler.arm(
            SILENCE_TIMER, self.settings.silence_threshold_ms, self._on_silence_elapsed
        )
        self.scheduler.arm(
            HOLD_TIMER, self.settings.hold_threshold_ms, self._on_hold_elapsed
        )

    def on_ai_transcript_delta(self) -> None:
        """AI audio is playing."""
        self._ai_speaking = True
        self._hold_offered = False
        self.scheduler.cancel(HOLD_TIMER)

    def on_ai_turn_done(self) -> None:
        """AI finished its line: advance after the post-speech delay."""
        self._ai_speaking = False
        if not self._session.is_active:
            return
        self.scheduler.arm(
            POST_SPEECH_TIMER,
            self.settings.post_speech_delay_ms,
            self._on_post_speech_elapsed,
        )

    def _on_silence_elapsed(self) -> None:
        before = self._session.current_line_index
        after = self.silence_timeout(self.settings.silence_threshold_ms)
        if after.current_line_index == before:
            logger.debug("Silence elapsed without advancing", cursor=before)

    def _on_hold_elapsed(self) -> None:
        if not self._ai_speaking and not self._session.is_completed:
            self._hold_offered = True
            logger.debug("Offering hold position", cursor=self._session.current_line_index)

    def _on_post_speech_elapsed(self) -> None:
        # Paused or completed while the delay ran
        if self._session.is_active:
            self.advance()
