"""CLI entry point for quizmark."""

from pathlib import Path

import click

from quizmark.config.logging_setup import configure_logging
from quizmark.config.settings import Settings


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """quizmark: normalize quiz markdown and grade answers."""
    ctx.ensure_object(dict)
    settings = Settings.load()
    try:
        configure_logging(log_level or settings.get_log_level())
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level")
    ctx.obj["settings"] = settings


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
def normalize(source) -> None:
    """Normalize assistant markdown from SOURCE (default: stdin)."""
    from quizmark.engine.normalizer import normalize as normalize_text

    click.echo(normalize_text(source.read()))


@main.command()
@click.argument("selected")
@click.argument("option_text")
@click.argument("correct")
def classify(selected: str, option_text: str, correct: str) -> None:
    """Print whether SELECTED is the CORRECT answer; exits 1 when it is not."""
    from quizmark.engine.classifier import classify as classify_answer

    is_correct = classify_answer(selected, option_text, correct)
    click.echo("correct" if is_correct else "incorrect")
    if not is_correct:
        raise SystemExit(1)


@main.command()
@click.argument("text")
def strip(text: str) -> None:
    """Strip redundant letter/number prefixes from option TEXT."""
    from quizmark.engine.options import strip_option_prefix

    click.echo(strip_option_prefix(text))


@main.command()
@click.argument("quiz_file", type=click.Path(path_type=Path))
@click.pass_context
def review(ctx: click.Context, quiz_file: Path) -> None:
    """Print the review summary for a finished quiz (YAML or JSON)."""
    from quizmark.engine.quiz_loader import load_quiz
    from quizmark.engine.review import quiz_summary

    try:
        settings: Settings = ctx.obj["settings"]
        quiz = load_quiz(
            quiz_file,
            difficulty=settings.difficulty.value,
            time_per_question=settings.time_per_question,
        )
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))
    click.echo(quiz_summary(quiz))


@main.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Run the JSON-lines bridge on stdin/stdout."""
    import asyncio

    from quizmark.server.__main__ import main as server_main

    asyncio.run(server_main(settings=ctx.obj["settings"]))


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show the effective configuration."""
    settings: Settings = ctx.obj["settings"]
    for key, value in settings.model_dump(mode="json").items():
        click.echo(f"  {key}: {value}")
