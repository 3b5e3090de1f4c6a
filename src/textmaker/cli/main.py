import json
import random
import sys
from pathlib import Path
from typing import List, Optional

import typer

from ..core.config import Settings
from ..core.errors import TextMakerError
from ..core.logging import setup_logging

app = typer.Typer(add_completion=False, help="textmaker CLI")


@app.callback()
def _init(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        help="Config file (.textmaker.yaml auto-discovered)",
    ),
) -> None:
    try:
        settings = Settings.load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e
    setup_logging(settings.LOG_FORMAT, settings.LOG_LEVEL)
    ctx.obj = settings


def _settings(ctx: typer.Context, **overrides) -> Settings:
    settings: Settings = ctx.obj or Settings()
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return settings
    try:
        return Settings.model_validate({**settings.model_dump(), **update})
    except ValueError as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e


def _read_inputs(texts: List[str], file: Optional[str]) -> List[str]:
    inputs = list(texts)
    if file:
        if file == "-":
            content = sys.stdin.read()
        else:
            path = Path(file)
            if not path.exists():
                typer.echo(f"❌ Input file not found: {file}", err=True)
                raise typer.Exit(1)
            content = path.read_text(encoding="utf-8")
        inputs.extend(line for line in content.splitlines() if line.strip())
    return inputs


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def generate(
    ctx: typer.Context,
    texts: Optional[List[str]] = typer.Argument(None, help="Message bodies to learn from"),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Read one message per non-empty line ('-' for stdin)"
    ),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of texts to generate"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed the random generator"),
    tokenizer: Optional[str] = typer.Option(None, "--tokenizer", help="Tokenizer provider: mecab|dummy"),
    dicdir: Optional[str] = typer.Option(None, "--dicdir", help="MeCab dictionary directory"),
    max_attempts: Optional[int] = typer.Option(None, "--max-attempts", help="Retry cap per text"),
    output_format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Generate new text by chaining chunks of the given messages."""
    from ..env_checks import assert_mecab_dicdir
    from ..pipeline.runner import create_text_from_inputs
    from ..pipeline.steps.tokenize import get_tokenizer

    if output_format not in ("text", "json"):
        typer.echo(f"❌ Unknown format: {output_format} (expected text|json)", err=True)
        raise typer.Exit(1)

    settings = _settings(
        ctx,
        TOKENIZER=tokenizer,
        MECAB_DIC_DIR=dicdir,
        MAX_ATTEMPTS=max_attempts,
        RANDOM_SEED=seed,
    )
    inputs = _read_inputs(texts or [], file)
    if not inputs:
        typer.echo("❌ No input messages given (pass TEXTS or --file)", err=True)
        raise typer.Exit(1)

    if settings.TOKENIZER == "mecab":
        assert_mecab_dicdir(settings.MECAB_DIC_DIR)
    if settings.RANDOM_SEED is not None:
        random.seed(settings.RANDOM_SEED)

    morph = get_tokenizer(settings.TOKENIZER, settings.MECAB_DIC_DIR)
    results = []
    try:
        for _ in range(count):
            results.append(create_text_from_inputs(inputs, settings=settings, tokenizer=morph))
    except TextMakerError as e:
        typer.echo(f"❌ Generation failed: {e}", err=True)
        raise typer.Exit(1) from e

    if output_format == "json":
        typer.echo(json.dumps({"results": results}, ensure_ascii=False, indent=2))
    else:
        for result in results:
            typer.echo(result)


@app.command()
def tokens(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Message body"),
    tokenizer: Optional[str] = typer.Option(None, "--tokenizer", help="Tokenizer provider: mecab|dummy"),
) -> None:
    """Show the tokens a message contributes after sanitizing."""
    from ..markup.parser import parse
    from ..pipeline.steps.sanitize import sanitize
    from ..pipeline.steps.tokenize import get_tokenizer, tokenize

    settings = _settings(ctx, TOKENIZER=tokenizer)
    morph = get_tokenizer(settings.TOKENIZER, settings.MECAB_DIC_DIR)
    try:
        result = tokenize(sanitize(parse(text)), morph)
    except TextMakerError as e:
        typer.echo(f"❌ Tokenization failed: {e}", err=True)
        raise typer.Exit(1) from e
    for token in result:
        typer.echo(f"{token.surface!r}\t{token.pos}")


@app.command()
def chunks(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Message body"),
    tokenizer: Optional[str] = typer.Option(None, "--tokenizer", help="Tokenizer provider: mecab|dummy"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Window size"),
) -> None:
    """Show the chunk windows a message contributes to the corpus."""
    from ..pipeline.runner import create_chunks_from_input
    from ..pipeline.steps.tokenize import get_tokenizer

    settings = _settings(ctx, TOKENIZER=tokenizer, CHUNK_SIZE=chunk_size)
    morph = get_tokenizer(settings.TOKENIZER, settings.MECAB_DIC_DIR)
    try:
        result = create_chunks_from_input(text, morph, settings.CHUNK_SIZE)
    except TextMakerError as e:
        typer.echo(f"❌ Tokenization failed: {e}", err=True)
        raise typer.Exit(1) from e
    for chunk in result:
        typer.echo(" | ".join(repr(t.surface) for t in chunk))
