"""Command-line interface.

Usage:
    autoredact redact scan1.png invoice.pdf --output ./redacted/
    autoredact settings add-date "January 5, 2024"
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple

import click

from .batch import BatchOrchestrator
from .config import load_settings
from .factory import build_batch
from .logging_config import setup_logging
from .models.entities import BatchItemSnapshot, BatchStatus, DetectionConfig
from .rules.dates import build_date_rule, format_date, parse_date
from .rules.validation import ValidationError, build_regex_rule
from .schemas import StoredDetectionSettings
from .settings_store import DetectionSettingsStore

_STATUS_COLORS = {
    BatchStatus.COMPLETE: "green",
    BatchStatus.ERROR: "red",
    BatchStatus.PROCESSING: "cyan",
}


def _apply_overrides(
    config: DetectionConfig,
    disabled: Tuple[str, ...],
    allow: Tuple[str, ...],
    block_words: Tuple[str, ...],
    dates: Tuple[str, ...],
    patterns: Tuple[str, ...],
) -> DetectionConfig:
    """Layer per-run command-line rules over the stored configuration."""
    custom_dates = list(config.custom_dates)
    for text in dates:
        rule = build_date_rule(text)
        if isinstance(rule, ValidationError):
            raise click.BadParameter(rule.message, param_hint="--date")
        custom_dates.append(rule)

    custom_regex = list(config.custom_regex)
    for pattern in patterns:
        rule = build_regex_rule(pattern)
        if isinstance(rule, ValidationError):
            raise click.BadParameter(rule.message, param_hint="--regex")
        custom_regex.append(rule)

    return replace(
        config,
        allowlist=config.allowlist | frozenset(allow),
        block_words=config.block_words | frozenset(w for w in block_words if w.strip()),
        custom_dates=tuple(custom_dates),
        custom_regex=tuple(custom_regex),
        **{name: False for name in disabled},
    )


def _echo_item(snapshot: BatchItemSnapshot) -> None:
    if snapshot.status is BatchStatus.PROCESSING:
        return
    status = click.style(snapshot.status.value, fg=_STATUS_COLORS.get(snapshot.status))
    line = f"  [{status}] {snapshot.name}"
    if snapshot.status is BatchStatus.COMPLETE:
        counts = ", ".join(f"{k}={v}" for k, v in snapshot.breakdown.to_dict().items() if v)
        line += f"  ({counts or 'nothing found'})"
    elif snapshot.error:
        line += f"  {snapshot.error}"
    click.echo(line)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Detect and redact sensitive data in images and scanned documents."""
    settings = load_settings()
    setup_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
    )
    ctx.obj = {"settings": settings, "store": DetectionSettingsStore(settings.storage_dir)}


@main.command()
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    "output_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for redacted PNG files",
)
@click.option(
    "--disable",
    multiple=True,
    type=click.Choice(["email", "ip", "credit_card", "secret", "pii"]),
    help="Turn off a built-in category for this run (repeatable)",
)
@click.option("--allow", multiple=True, help="Value never to redact (repeatable)")
@click.option("--block-word", "block_words", multiple=True, help="Word always to redact (repeatable)")
@click.option("--date", "dates", multiple=True, help="Date to redact in any written form (repeatable)")
@click.option("--regex", "patterns", multiple=True, help="Regular expression to redact (repeatable)")
@click.pass_context
def redact(
    ctx: click.Context,
    inputs: Tuple[str, ...],
    output_dir: Path,
    disable: Tuple[str, ...],
    allow: Tuple[str, ...],
    block_words: Tuple[str, ...],
    dates: Tuple[str, ...],
    patterns: Tuple[str, ...],
):
    """Redact INPUTS (images and PDFs) into OUTPUT as PNG files."""
    store: DetectionSettingsStore = ctx.obj["store"]
    config = _apply_overrides(
        store.load_config(), disable, allow, block_words, dates, patterns
    )

    batch: BatchOrchestrator = build_batch(ctx.obj["settings"], on_item=_echo_item)
    report = batch.submit(inputs)
    for path, reason in report.rejected:
        click.echo(click.style(f"Skipped {path}: {reason}", fg="yellow"))
    if not report.items:
        click.echo(click.style("Error: nothing to process", fg="red"))
        sys.exit(1)

    click.echo(f"Processing {len(report.items)} item(s)...")
    progress = batch.run(config)

    output_dir.mkdir(parents=True, exist_ok=True)
    for filename, raster in batch.outputs():
        raster.save(output_dir / filename, format="PNG")

    failed = sum(1 for item in batch.items if item.status is BatchStatus.ERROR)
    click.echo()
    click.echo(f"Processed {progress.current}/{progress.total}, {failed} failed")
    click.echo(f"Output written to {output_dir}")
    if failed:
        sys.exit(2)


@main.group()
def settings():
    """Manage stored detection settings."""


@settings.command("show")
@click.pass_context
def settings_show(ctx: click.Context):
    """Print the stored settings as JSON."""
    store: DetectionSettingsStore = ctx.obj["store"]
    click.echo(store.load().model_dump_json(indent=2))


@settings.command("reset")
@click.pass_context
def settings_reset(ctx: click.Context):
    """Restore default settings."""
    ctx.obj["store"].reset()
    click.echo("Settings reset to defaults")


@settings.command("add-date")
@click.argument("text")
@click.pass_context
def settings_add_date(ctx: click.Context, text: str):
    """Redact TEXT's calendar date in every common format."""
    parsed = parse_date(text)
    if isinstance(parsed, ValidationError):
        raise click.BadParameter(parsed.message, param_hint="TEXT")
    store: DetectionSettingsStore = ctx.obj["store"]
    stored = store.load()
    store.save(stored.model_copy(update={"custom_dates": stored.custom_dates + [text.strip()]}))
    click.echo(f"Added date rule {format_date(parsed)} ({format_date(parsed, 'long')})")


@settings.command("add-regex")
@click.argument("pattern")
@click.option("--case-sensitive", is_flag=True, help="Match case exactly")
@click.option("--label", default=None, help="Name shown for matches of this rule")
@click.pass_context
def settings_add_regex(ctx: click.Context, pattern: str, case_sensitive: bool, label: Optional[str]):
    """Redact text matching PATTERN."""
    rule = build_regex_rule(pattern, case_sensitive=case_sensitive, label=label)
    if isinstance(rule, ValidationError):
        raise click.BadParameter(rule.message, param_hint="PATTERN")
    store: DetectionSettingsStore = ctx.obj["store"]
    config = store.load_config()
    updated = replace(config, custom_regex=config.custom_regex + (rule,))
    store.save(StoredDetectionSettings.from_detection_config(updated))
    click.echo(f"Added regex rule {rule.id}")


@settings.command("add-block-word")
@click.argument("word")
@click.pass_context
def settings_add_block_word(ctx: click.Context, word: str):
    """Always redact WORD."""
    if not word.strip():
        raise click.BadParameter("Word cannot be empty", param_hint="WORD")
    store: DetectionSettingsStore = ctx.obj["store"]
    stored = store.load()
    if word.strip().lower() not in {w.strip().lower() for w in stored.block_words}:
        stored = stored.model_copy(update={"block_words": stored.block_words + [word.strip()]})
        store.save(stored)
    click.echo(f"Blocking {word.strip()!r}")


@settings.command("allow")
@click.argument("value")
@click.pass_context
def settings_allow(ctx: click.Context, value: str):
    """Never redact VALUE."""
    store: DetectionSettingsStore = ctx.obj["store"]
    stored = store.load()
    if value not in stored.allowlist:
        store.save(stored.model_copy(update={"allowlist": stored.allowlist + [value]}))
    click.echo(f"Allowing {value!r}")


if __name__ == "__main__":
    main()
