"""Interactive terminal session."""

import asyncio
import contextlib
import logging

import click
import questionary
from questionary import Style

from ..core.events import CHOICES_SNACK, SessionListener, TerminalNotifier
from ..core.session import SessionMachine
from ..core.timer import format_clock
from ..models.session import Mode
from ..services.bootstrap import close_session, open_session
from ..services.stats import StatsService, newly_unlocked
from .base import async_command, db_path_from, echo_info, echo_success, echo_warning

logger = logging.getLogger(__name__)

ACTION_TOGGLE = "toggle"
ACTION_SKIP = "skip"
ACTION_RESET = "reset"
ACTION_REGENERATE = "regenerate"
ACTION_SKIP_EXTENSION = "skip_extension"
ACTION_QUIT = "quit"

# Custom style for session menus
custom_style = Style(
    [
        ("qmark", "fg:#00897b bold"),
        ("question", "bold"),
        ("answer", "fg:#f4511e bold"),
        ("pointer", "fg:#00897b bold"),
        ("highlighted", "fg:#00897b bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)

WELCOME_TEXT = """\
Welcome to movemoro!

Work until the timer runs out, then pick one of two quick exercises to
unlock your break. During a break you can earn extra minutes by doing a
longer exercise.
"""


class TerminalView(SessionListener):
    """Prints session events and wakes the prompt loop on state changes."""

    def __init__(self):
        self.changed = asyncio.Event()

    def on_tick(self, remaining_seconds: int) -> None:
        if remaining_seconds and remaining_seconds % 60 == 0:
            click.echo(click.style(f"  {format_clock(remaining_seconds)} left", dim=True))

    def on_mode_change(self, mode: Mode, is_long_break: bool) -> None:
        click.echo()
        click.echo(click.style(f"== {mode.display_name} ==", bold=True, fg="cyan"))
        self.changed.set()

    def on_exercise_choices(self, kind, exercises) -> None:
        if kind == CHOICES_SNACK:
            click.echo("Pick an exercise to unlock your break.")
        else:
            click.echo("Want a longer break? Complete an extension exercise.")
        self.changed.set()

    def on_extension_granted(self, before_seconds: int, after_seconds: int, bonus_seconds: int) -> None:
        echo_success(
            f"+{bonus_seconds // 60} min! "
            f"{format_clock(before_seconds)} -> {format_clock(after_seconds)}"
        )
        self.changed.set()


def _status_line(machine: SessionMachine) -> str:
    timer = machine.timer
    state = "running" if timer.is_running else "paused"
    counter = machine.state.get_counter_display(machine.settings.sessions_before_long_break)
    return f"{machine.mode.display_name} | {format_clock(timer.remaining)} ({state}) | {counter}"


def _build_question(machine: SessionMachine) -> questionary.Question:
    """Menu for the current state. Values are exercise ids or ACTION_* names."""
    state = machine.state
    if state.awaiting_exercise:
        choices = [
            questionary.Choice(
                f"[{e.environment.value}] {e.name} ({e.difficulty.value}, ~{e.duration_seconds}s)",
                value=("confirm", e.id),
            )
            for e in machine.choices
        ]
        choices += [
            questionary.Choice("Show different exercises", value=(ACTION_REGENERATE, None)),
            questionary.Choice("Quit", value=(ACTION_QUIT, None)),
        ]
        return questionary.select(
            "Which exercise did you do?", choices=choices, style=custom_style
        )

    choices = []
    if state.extension_panel_active:
        choices += [
            questionary.Choice(
                f"{e.name} (+{e.break_extension_seconds // 60} min, {e.difficulty.value})",
                value=("extend", e.id),
            )
            for e in machine.extension_candidates
        ]
        choices.append(questionary.Choice("No extension", value=(ACTION_SKIP_EXTENSION, None)))

    toggle_label = "Pause" if machine.timer.is_running else "Start"
    choices += [
        questionary.Choice(toggle_label, value=(ACTION_TOGGLE, None)),
        questionary.Choice("Skip", value=(ACTION_SKIP, None)),
        questionary.Choice("Reset", value=(ACTION_RESET, None)),
        questionary.Choice("Quit", value=(ACTION_QUIT, None)),
    ]
    return questionary.select(_status_line(machine), choices=choices, style=custom_style)


def _apply(machine: SessionMachine, action: str, exercise_id: str | None) -> None:
    if action == "confirm":
        machine.confirm_exercise(exercise_id)
    elif action == "extend":
        machine.confirm_extension(exercise_id)
    elif action == ACTION_REGENERATE:
        machine.regenerate()
    elif action == ACTION_SKIP_EXTENSION:
        machine.skip_extension()
    elif action == ACTION_TOGGLE:
        machine.toggle_timer()
    elif action == ACTION_SKIP:
        machine.skip()
    elif action == ACTION_RESET:
        machine.reset()


async def _prompt_until_changed(question: questionary.Question, view: TerminalView):
    """Ask ``question``; abandon it if the session changes meanwhile.

    Returns the answer, or ``None`` when the prompt was superseded.
    """
    view.changed.clear()
    prompt = asyncio.ensure_future(question.ask_async(patch_stdout=True))
    changed = asyncio.ensure_future(view.changed.wait())
    done, _ = await asyncio.wait({prompt, changed}, return_when=asyncio.FIRST_COMPLETED)

    if prompt in done:
        changed.cancel()
        return prompt.result()

    logger.debug("Session changed; redrawing the menu")
    prompt.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await prompt
    return None


@click.command()
@click.option("--fresh", is_flag=True, help="Ignore a recently saved session")
@click.pass_context
@async_command
async def run(ctx: click.Context, fresh: bool):
    """Run an interactive session in the terminal.

    The work timer starts paused; choose Start to begin. Your session is
    saved when you quit and resumed if you come back within five minutes.
    """
    db_path = db_path_from(ctx)
    view = TerminalView()
    notifier = TerminalNotifier()
    context = await open_session(
        db_path, listeners=[view], notifier=notifier, resume=not fresh
    )
    machine = context.machine
    stats_service = StatsService(db_path)
    stats_before = await stats_service.get_stats()

    settings = machine.settings
    notifier.muted = not settings.audio_enabled

    if not settings.has_seen_welcome:
        click.echo(WELCOME_TEXT)
        await context.settings_repo.save(settings.with_changes(has_seen_welcome=True))

    if not context.catalog:
        echo_warning("No exercises available; breaks will start without an exercise.")
    if context.resumed:
        echo_info("Resumed your previous session.")

    try:
        while True:
            answer = await _prompt_until_changed(_build_question(machine), view)
            if answer is None:
                if view.changed.is_set():
                    continue
                # Ctrl+C in the prompt
                break
            action, exercise_id = answer
            if action == ACTION_QUIT:
                break
            _apply(machine, action, exercise_id)
    finally:
        await close_session(context)

    stats_after = await stats_service.get_stats()
    for achievement in newly_unlocked(stats_before, stats_after):
        echo_success(f"Achievement unlocked: {achievement.icon} {achievement.name}")
    click.echo("Session saved. See you next time!")
