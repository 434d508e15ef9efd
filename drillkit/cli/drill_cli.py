"""
drill: terminal driver for drill sessions.

A Rich terminal interface over the drill engine. It only renders questions
and forwards answers; grading, statistics and achievements happen behind
the session and the event bus.

Commands:
- drill domains   - List content domains, groups and item counts
- drill start     - Play a drill session
"""
from __future__ import annotations

import sys
from typing import Annotated, Optional

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from config import get_settings
from drillkit.app import DrillApp
from drillkit.content import ContentDomain, available_groups, load_items
from drillkit.delivery import InMemoryStatsStore
from drillkit.drill import GameMode, Question, SessionEngine
from drillkit.errors import DrillError


# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="drill",
    help="drill: kana, kanji and vocabulary practice in the terminal",
    no_args_is_help=True,
)
console = Console()

QUIT_INPUTS = {":q", ":quit"}

STYLES = {
    "correct": "bold green",
    "incorrect": "bold red",
    "info": "bold cyan",
    "dim": "dim",
}


def configure_logging(level: str) -> None:
    """Route loguru output to stderr at the given level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    configure_logging("DEBUG" if verbose else get_settings().log_level)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def domains() -> None:
    """List content domains with their groups and item counts."""
    content_dir = get_settings().content_dir

    table = Table(title="Content Domains", box=box.SIMPLE_HEAVY)
    table.add_column("Domain", style="cyan")
    table.add_column("Groups")
    table.add_column("Items", justify="right")

    for domain in ContentDomain:
        try:
            groups = available_groups(domain, content_dir)
            count = len(load_items(domain, content_dir=content_dir))
        except DrillError as e:
            logger.warning(f"Skipping {domain.value}: {e}")
            table.add_row(domain.value, "[red]unavailable[/red]", "-")
            continue
        table.add_row(domain.value, ", ".join(groups), str(count))

    console.print(table)


@app.command()
def start(
    domain: Annotated[str, typer.Argument(help="Content domain: kana, kanji or vocabulary")],
    mode: Annotated[
        Optional[str],
        typer.Option("--mode", "-m", help="forward-choice, reverse-choice, forward-free-entry, reverse-free-entry"),
    ] = None,
    group: Annotated[
        Optional[list[str]], typer.Option("--group", "-g", help="Content group, repeatable (e.g. hiragana, N5)")
    ] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", min=0, help="Maximum items in the session (0 = all)")] = None,
    options: Annotated[Optional[int], typer.Option("--options", "-o", min=2, help="Options per choice question")] = None,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Random seed for a reproducible session")] = None,
) -> None:
    """
    Start a drill session.

    Examples:
        drill start kana -g hiragana              # Hiragana, multiple choice
        drill start kanji -m reverse-free-entry   # Type the kanji for a meaning
        drill start vocabulary -n 10 --seed 7     # Ten words, reproducible order
    """
    settings = get_settings()
    if seed is not None:
        settings = settings.model_copy(update={"random_seed": seed})

    if mode is not None:
        try:
            GameMode(mode)
        except ValueError:
            valid = ", ".join(m.value for m in GameMode)
            console.print(f"[red]Unknown mode '{mode}'. Use one of: {valid}[/red]")
            raise typer.Exit(1)

    drill_app = DrillApp(settings)
    try:
        session = drill_app.new_session(
            domain,
            mode,
            groups=group,
            limit=limit,
            option_count=options,
        )
    except DrillError as e:
        console.print(f"[red]Cannot start session: {e}[/red]")
        raise typer.Exit(1)

    header = Panel(
        f"[bold cyan]DRILL SESSION[/]\n"
        f"Domain: {session.domain}\n"
        f"Mode: {session.mode.value}\n"
        f"Items: {session.total}",
        border_style="cyan",
    )
    console.print(header)
    console.print("[dim]Type the answer (or the option number). ':q' to stop.[/dim]\n")

    try:
        finished = _play(session)
    except KeyboardInterrupt:
        console.print("\n\n[yellow]Session interrupted.[/yellow]")
        finished = False

    if finished:
        console.print("\n[bold green]Session complete![/bold green]")
    _display_session_summary(drill_app, session)


# =============================================================================
# Session Loop
# =============================================================================


def _play(session: SessionEngine) -> bool:
    """Run questions until the session is exhausted. Returns False if the user quit."""
    while not session.is_complete():
        question = session.current_question()
        _display_question(question)

        raw = Prompt.ask("[bold]>[/bold]", default="", show_default=False)
        if raw.strip().lower() in QUIT_INPUTS:
            console.print("[yellow]Ending session early.[/yellow]")
            return False

        outcome = session.submit_answer(_resolve_choice(question, raw))
        if outcome.correct:
            console.print(f"[{STYLES['correct']}]Correct![/]")
        else:
            console.print(f"[{STYLES['incorrect']}]Incorrect[/] - expected [bold]{outcome.expected}[/bold]")
        if outcome.metadata and outcome.metadata.extra:
            console.print(f"[{STYLES['dim']}]{outcome.metadata.primary}: {', '.join(outcome.metadata.extra)}[/]")
        console.print()
    return True


def _resolve_choice(question: Question, raw: str) -> str:
    """Map an option number to its text; anything else is the answer itself."""
    text = raw.strip()
    if question.options and text.isdigit():
        index = int(text) - 1
        if 0 <= index < len(question.options):
            return question.options[index]
    return raw


def _display_question(question: Question) -> None:
    console.print(
        Panel(
            f"[bold]{question.prompt}[/bold]",
            title=f"[{STYLES['info']}]{question.position + 1}/{question.total}[/]",
            border_style="cyan",
            box=box.HEAVY,
            padding=(1, 4),
            expand=False,
        )
    )
    if question.options:
        table = Table(box=box.MINIMAL, show_header=False)
        table.add_column("Index", style="cyan", justify="right", width=4)
        table.add_column("Option", style="white")
        for i, option in enumerate(question.options, 1):
            table.add_row(f"[{i}]", option)
        console.print(table)


def _display_session_summary(drill_app: DrillApp, session: SessionEngine) -> None:
    table = Table(title="Session Summary", box=box.SIMPLE)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Answered", f"{session.answered}/{session.total}")
    table.add_row("Correct", f"[green]{session.correct_count}[/green]")
    table.add_row("Incorrect", f"[red]{session.incorrect_count}[/red]")
    table.add_row("Accuracy", f"{session.accuracy:.0f}%")
    console.print(table)

    if isinstance(drill_app.store, InMemoryStatsStore):
        weakest = drill_app.store.weakest_prompts(session.domain)
        if weakest:
            review = Table(title="Needs Review", box=box.SIMPLE)
            review.add_column("Prompt", style="cyan")
            review.add_column("Missed", justify="right", style="red")
            review.add_column("Accuracy", justify="right")
            for prompt, tally in weakest:
                review.add_row(prompt, str(tally.incorrect), f"{tally.accuracy:.0f}%")
            console.print(review)

    announced = drill_app.achievements.announced
    if announced:
        console.print("[bold yellow]Achievements unlocked:[/bold yellow]")
        for achievement_id in announced:
            achievement = drill_app.achievements.achievements[achievement_id]
            console.print(f"  * {achievement.title} - {achievement.description}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
