"""Session state machine: work, breaks, and the break-extension sub-flow."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from ..models.exercises import Exercise
from ..models.session import Mode, SessionSnapshot, SessionState
from ..models.settings import Settings
from .events import (
    CHOICES_EXTENSION,
    CHOICES_SNACK,
    Notifier,
    NotifyEvent,
    NullNotifier,
    SessionListener,
)
from .scheduler import Cancellable, Scheduler
from .selection import ExerciseSelector
from .timer import CountdownTimer

logger = logging.getLogger(__name__)

EXTENSION_OFFER_DELAY_SECONDS = 2.0
EXTENSION_CANDIDATE_COUNT = 3


class SessionMachine:
    """Owns the session state and the single live timer.

    Timer completion drives the transitions:

    * work -> snack choices -> ``confirm_exercise`` -> break or long break
      (timer auto-started)
    * break/long break -> work (timer left stopped)

    During a break one extension offer may be made; confirming it adds the
    exercise's bonus seconds to the live break timer.
    """

    def __init__(
        self,
        settings: Settings,
        selector: ExerciseSelector,
        *,
        scheduler: Scheduler,
        listeners: Sequence[SessionListener] = (),
        notifier: Optional[Notifier] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings
        self.selector = selector
        self.state = SessionState()
        self._scheduler = scheduler
        self._listeners = list(listeners)
        self._notifier = notifier or NullNotifier()
        self._clock = clock

        self._timer: Optional[CountdownTimer] = None
        self._choices: list[Exercise] = []
        self._extension_candidates: list[Exercise] = []
        self._offer_handle: Optional[Cancellable] = None

        self.selector.set_preferences(settings.exercise_preferences)
        self._replace_timer(self._duration_for_mode(self.state.mode))

    # -- read-only views -----------------------------------------------------

    @property
    def timer(self) -> CountdownTimer:
        assert self._timer is not None
        return self._timer

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def choices(self) -> list[Exercise]:
        return list(self._choices)

    @property
    def extension_candidates(self) -> list[Exercise]:
        return list(self._extension_candidates)

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def snapshot(self) -> SessionSnapshot:
        timer = self.timer
        return SessionSnapshot(
            mode=self.state.mode,
            session_count=self.state.session_count,
            last_break_mode=self.state.last_break_mode,
            duration_seconds=timer.duration,
            remaining_seconds=timer.remaining,
            is_running=timer.is_running,
            awaiting_exercise=self.state.awaiting_exercise,
            extension_panel_active=self.state.extension_panel_active,
            break_extension_offered=self.state.break_extension_offered,
            choices=tuple(self._choices),
            extension_candidates=tuple(self._extension_candidates),
        )

    # -- user intents --------------------------------------------------------

    def toggle_timer(self) -> bool:
        """Start or pause the timer. Returns whether it is now running."""
        if self.state.awaiting_exercise:
            logger.debug("Toggle ignored while an exercise choice is pending")
            return False
        if self.timer.is_running:
            self.timer.pause()
        else:
            self.start()
        return self.timer.is_running

    def start(self) -> None:
        if self.state.awaiting_exercise:
            return
        if self.state.mode == Mode.WORK:
            self._close_extension_panel()
        self.timer.start()

    def pause(self) -> None:
        self.timer.pause()

    def skip(self) -> None:
        """Force completion of the current timer."""
        if self.state.awaiting_exercise:
            logger.debug("Skip ignored while an exercise choice is pending")
            return
        self.timer.pause()
        self._handle_complete()

    def reset(self) -> None:
        """Recreate the current mode's timer at full duration, stopped."""
        self._replace_timer(self._duration_for_mode(self.state.mode))

    def regenerate(self) -> list[Exercise]:
        """Draw a new snack pair while a choice is pending."""
        if not self.state.awaiting_exercise:
            return []
        self._choices = self.selector.select_snack_pair()
        self._emit_choices(CHOICES_SNACK, self._choices)
        return self.choices

    def confirm_exercise(self, exercise_id: str) -> bool:
        """Confirm a displayed snack and enter the break."""
        if not self.state.awaiting_exercise:
            logger.warning("No exercise choice pending; ignoring %s", exercise_id)
            return False

        exercise = next((e for e in self._choices if e.id == exercise_id), None)
        if exercise is None:
            logger.warning("Exercise %s is not among the current choices", exercise_id)
            return False

        self._record(exercise)
        self._enter_break()
        return True

    def offer_extension(self) -> list[Exercise]:
        """Offer extension candidates, once per break."""
        self._cancel_offer()
        if not self.state.mode.is_break or self.state.break_extension_offered:
            return []

        self.state.break_extension_offered = True
        candidates = self.selector.select_extension_candidates(EXTENSION_CANDIDATE_COUNT)
        if not candidates:
            logger.info("No extension exercises available")
            return []

        self._extension_candidates = candidates
        self.state.extension_panel_active = True
        self._emit_choices(CHOICES_EXTENSION, candidates)
        return list(candidates)

    def confirm_extension(self, exercise_id: str) -> bool:
        """Grant the bonus break time of a completed extension exercise."""
        if not self.state.extension_panel_active:
            logger.warning("No extension offer active; ignoring %s", exercise_id)
            return False

        exercise = next((e for e in self._extension_candidates if e.id == exercise_id), None)
        if exercise is None:
            logger.warning("Exercise %s is not among the extension candidates", exercise_id)
            return False

        bonus = exercise.break_extension_seconds
        if bonus <= 0:
            logger.warning("Exercise %s grants no break extension", exercise_id)
            return False

        self._record(exercise)

        if self.state.mode == Mode.WORK:
            # The break already ran out: re-open the previous break type
            # with exactly the bonus time.
            before = 0
            self.state.awaiting_exercise = False
            self._choices = []
            self._set_mode(self.state.last_break_mode, bonus)
            self.timer.start()
        else:
            before = self.timer.remaining
            self.timer.extend(bonus)

        after = self.timer.remaining
        logger.info(
            "Break extended by %ss (%ss -> %ss) with %s",
            bonus,
            before,
            after,
            exercise.name,
        )
        self._close_extension_panel()
        for listener in self._listeners:
            listener.on_extension_granted(before, after, bonus)
        return True

    def skip_extension(self) -> None:
        self._close_extension_panel()

    def update_settings(self, settings: Settings) -> None:
        """Apply new settings; an idle timer picks up the new duration."""
        self.settings = settings
        self.selector.set_preferences(settings.exercise_preferences)

        timer = self.timer
        if not timer.is_running and timer.remaining == timer.duration:
            self._replace_timer(self._duration_for_mode(self.state.mode))
        self._notifier.notify(NotifyEvent.GENERIC)

    def restore(self, snapshot: SessionSnapshot) -> None:
        """Resume a saved session, paused."""
        self.state.mode = snapshot.mode
        self.state.session_count = max(0, snapshot.session_count)
        self.state.last_break_mode = snapshot.last_break_mode
        self.state.break_extension_offered = snapshot.break_extension_offered
        self.state.extension_panel_active = False
        self.state.awaiting_exercise = False
        self._extension_candidates = []

        duration = snapshot.duration_seconds
        if duration <= 0:
            duration = self._duration_for_mode(snapshot.mode)
        remaining = min(max(0, snapshot.remaining_seconds), duration)
        if remaining == 0:
            self._replace_timer(duration)
            self._handle_complete()
            return
        self._replace_timer(duration, remaining)

        if snapshot.awaiting_exercise and snapshot.mode == Mode.WORK:
            self._await_exercise()
        logger.info(
            "Session restored: mode=%s sessions=%s remaining=%ss",
            snapshot.mode.value,
            snapshot.session_count,
            remaining,
        )

    # -- internals -----------------------------------------------------------

    def _duration_for_mode(self, mode: Mode) -> int:
        minutes = {
            Mode.WORK: self.settings.work_duration,
            Mode.BREAK: self.settings.break_duration,
            Mode.LONG_BREAK: self.settings.long_break_duration,
        }[mode]
        return minutes * 60

    def _replace_timer(
        self, duration_seconds: int, remaining_seconds: Optional[int] = None
    ) -> None:
        # Stop the superseded timer's periodic check before creating the next.
        if self._timer is not None:
            self._timer.pause()
        self._timer = CountdownTimer(
            duration_seconds,
            on_tick=self._handle_tick,
            on_complete=self._handle_complete,
            scheduler=self._scheduler,
            clock=self._clock,
            remaining_seconds=remaining_seconds,
        )
        for listener in self._listeners:
            listener.on_tick(self._timer.remaining)

    def _set_mode(self, mode: Mode, duration_seconds: Optional[int] = None) -> None:
        self.state.mode = mode
        if duration_seconds is None:
            duration_seconds = self._duration_for_mode(mode)
        self._replace_timer(duration_seconds)
        logger.info("Mode changed: %s", mode.value)
        for listener in self._listeners:
            listener.on_mode_change(mode, mode == Mode.LONG_BREAK)

    def _handle_tick(self, remaining: int) -> None:
        for listener in self._listeners:
            listener.on_tick(remaining)

    def _handle_complete(self) -> None:
        if self.state.mode == Mode.WORK:
            self._notifier.notify(NotifyEvent.WORK_COMPLETE)
            logger.info("Work session complete")
            self._await_exercise()
            return

        self._notifier.notify(NotifyEvent.BREAK_COMPLETE)
        self.state.session_count += 1
        for listener in self._listeners:
            listener.on_session_complete(
                self.state.session_count, self.settings.work_duration
            )
        logger.info("Break complete: sessions=%s", self.state.session_count)
        self._cancel_offer()
        # The extension panel stays visible until the next work run starts.
        self._set_mode(Mode.WORK)

    def _await_exercise(self) -> None:
        choices = self.selector.select_snack_pair()
        if not choices:
            logger.warning("No exercises available; entering the break without one")
            self._enter_break()
            return

        self.state.awaiting_exercise = True
        self._choices = choices
        self._emit_choices(CHOICES_SNACK, choices)

    def _enter_break(self) -> None:
        is_long_break = self.state.next_break_is_long(self.settings.sessions_before_long_break)
        break_mode = Mode.LONG_BREAK if is_long_break else Mode.BREAK

        self.state.awaiting_exercise = False
        self._choices = []
        self.state.last_break_mode = break_mode
        self.state.break_extension_offered = False
        self._close_extension_panel()

        self._set_mode(break_mode)
        self.timer.start()

        self._cancel_offer()
        self._offer_handle = self._scheduler.call_later(
            EXTENSION_OFFER_DELAY_SECONDS, self.offer_extension
        )

    def _record(self, exercise: Exercise) -> None:
        self.selector.record_completion(exercise)
        for listener in self._listeners:
            listener.on_exercise_recorded(exercise, self.selector.history)

    def _emit_choices(self, kind: str, exercises: Sequence[Exercise]) -> None:
        for listener in self._listeners:
            listener.on_exercise_choices(kind, list(exercises))

    def _close_extension_panel(self) -> None:
        self.state.extension_panel_active = False
        self._extension_candidates = []

    def _cancel_offer(self) -> None:
        if self._offer_handle is not None:
            self._offer_handle.cancel()
            self._offer_handle = None
