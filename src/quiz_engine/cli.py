from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from quiz_engine.quiz import AttemptKind, QuizSession, Screen
from quiz_engine.system import QuizSystem

app = typer.Typer(help="Terminal quiz runner over fixed and random tests per subject.")
console = Console()

ConfigOption = typer.Option(None, "--config", help="Path to configuration YAML.")


def _load_system(config: Optional[Path]) -> QuizSystem:
    """Instantiate `QuizSystem` with an optional config path."""
    return QuizSystem.from_config(config)


def _open_subject(system: QuizSystem, subject_id: str) -> QuizSession:
    if subject_id not in system.subjects:
        raise typer.BadParameter(
            "subject must be one of: " + ", ".join(system.subjects), param_hint="SUBJECT"
        )
    session = system.new_session()
    session.choose_subject(subject_id)
    return session


@app.command()
def subjects(config: Optional[Path] = ConfigOption):
    """List configured subjects and the size of each question bank."""
    system = _load_system(config)
    table = Table(title="Subjects")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Questions", justify="right")
    for subject in system.subjects.values():
        table.add_row(subject.id, subject.title, str(subject.question_count))
    console.print(table)


@app.command()
def tests(
    subject_id: str = typer.Argument(..., metavar="SUBJECT"),
    config: Optional[Path] = ConfigOption,
):
    """Show the tests of a subject with best results so far."""
    system = _load_system(config)
    session = _open_subject(system, subject_id)
    summaries = session.progress_summaries()

    table = Table(title=session.state.subject.title)
    table.add_column("ID", justify="right")
    table.add_column("Test")
    table.add_column("Questions", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Passed", justify="center")
    for test in session.state.tests:
        record = summaries[test.id]
        table.add_row(
            str(test.id),
            test.title,
            str(test.attempt_size),
            f"{record.best_score}/{record.total}",
            "✔" if record.passed else "○",
        )
    console.print(table)


def _run_attempt(session: QuizSession) -> bool:
    """Prompt through the running attempt. Returns False if the learner quit."""
    while session.screen is Screen.QUIZ:
        attempt = session.state.attempt
        question = session.current_question
        label = "Mistakes retry" if attempt.kind is AttemptKind.MISTAKES_RETRY else "Main pass"
        console.print(
            f"\n[dim]{label} • Question {attempt.cursor + 1}/{attempt.total}[/dim]"
        )
        console.print(f"[bold]{question.question}[/bold]")
        for number, option in enumerate(question.options, start=1):
            console.print(f"  {number}. {option}")

        choice = typer.prompt("Answer (number, q to quit)")
        if choice.strip().lower() == "q":
            session.exit_attempt()
            return False
        if not choice.strip().isdigit() or not 1 <= int(choice) <= len(question.options):
            console.print("[yellow]Pick one of the listed numbers.[/yellow]")
            continue

        session.select_option(question.options[int(choice) - 1])
        session.submit_answer()
        if session.state.attempt.last_correct:
            console.print("[green]✅ Correct[/green]")
        else:
            console.print("[red]❌ Wrong[/red]")
            console.print(f"Correct answer: {question.correct_answer}")
        session.advance()
    return True


def _print_result(session: QuizSession) -> None:
    summary = session.result()
    console.print(f"\n[bold]Result: {summary.final_correct}/{summary.total}[/bold]")
    if summary.passed:
        console.print("[green]✔ Passed[/green]")
    if summary.review_log:
        console.print("Answer review:")
        for number, entry in enumerate(summary.review_log, start=1):
            mark = "[green]✅[/green]" if entry.is_correct else "[red]❌[/red]"
            console.print(f"  {number}. {entry.question.question} {mark}")
            if not entry.is_correct:
                console.print(f"     Correct: {entry.question.correct_answer}")
    elif summary.mistakes and summary.retried:
        console.print("Result updated after the mistakes retry.")


@app.command()
def take(
    subject_id: str = typer.Argument(..., metavar="SUBJECT"),
    test_id: int = typer.Argument(..., metavar="TEST_ID"),
    config: Optional[Path] = ConfigOption,
):
    """Take one test interactively and record the outcome."""
    system = _load_system(config)
    session = _open_subject(system, subject_id)
    if test_id not in {test.id for test in session.state.tests}:
        raise typer.BadParameter(f"{subject_id} has no test {test_id}", param_hint="TEST_ID")

    session.choose_test(test_id)
    console.print(f"[bold]{session.state.test.title}[/bold]")
    if not _run_attempt(session):
        console.print("Attempt abandoned; nothing recorded.")
        raise typer.Exit()

    _print_result(session)
    summary = session.result()
    if summary.can_retry_mistakes:
        console.print(f"Mistakes in the main pass: {len(summary.mistakes)}")
        if typer.confirm("Work through your mistakes?", default=True):
            session.start_mistakes_retry()
            if not _run_attempt(session):
                console.print("Retry abandoned; nothing recorded.")
                raise typer.Exit()
            _print_result(session)

    chosen = session.state.test
    session.finish_session()
    record = system.progress.summary_for(subject_id, chosen)
    console.print(f"Best result: {record.best_score}/{record.total}")


@app.command()
def reset(
    config: Optional[Path] = ConfigOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
):
    """Forget all stored progress."""
    system = _load_system(config)
    if not yes and not typer.confirm("Delete all stored progress?", default=False):
        raise typer.Exit()
    if system.progress.clear():
        console.print("Progress cleared.")
    else:
        console.print("[yellow]Progress could not be written; cleared for this run only.[/yellow]")


if __name__ == "__main__":
    app()
