"""Daybook CLI: write, browse and summarize journal entries."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

import click

from daybook import __version__
from daybook.core.config import Config
from daybook.core.exceptions import ConfigurationError, JournalError, StorageWriteError
from daybook.core.storage import LocalStorage
from daybook.core.utils.logging import setup_logging_from_config
from daybook.journal import MOOD_OPTIONS, Entry, EntryRepository, EntryStore, JournalConfig, Mood, PathImageProvider
from daybook.journal.analytics import local_datetime

DEFAULT_CONFIG_PATH = Path.home() / ".daybook" / "config.yaml"

MOOD_CHOICE = click.Choice([m.value for m in Mood], case_sensitive=False)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _run(ctx: click.Context, action: Callable[[EntryRepository], Awaitable[None]], image: str | None = None) -> None:
    """Open the journal, run *action* against it and report journal errors."""
    config: Config = ctx.obj["config"]

    async def _main() -> None:
        try:
            journal_config = JournalConfig.from_config(config)
        except ConfigurationError as e:
            _fail(str(e))
        backend = LocalStorage(base_path=config.get("paths.storage_dir"))
        repo = EntryRepository(EntryStore(backend, journal_config), image_provider=PathImageProvider(image))
        await repo.initialize()
        if repo.error is not None:
            click.echo(f"Warning: {repo.error.user_message}. Starting with an empty journal.", err=True)
            repo.clear_error()
        try:
            await action(repo)
        except StorageWriteError as e:
            _fail(f"{e.user_message}. The change may not survive a restart ({e}).")
        except JournalError as e:
            _fail(f"{e.user_message} ({e}).")

    asyncio.run(_main())


def _format_entry(entry: Entry, repo: EntryRepository, full: bool = False) -> str:
    option = entry.mood_option
    badge = f"{option.emoji} {option.label}" if option else entry.mood
    dt = local_datetime(entry, repo.tz)
    when = dt.strftime("%H:%M") if dt is not None else "??:??"
    if full:
        when = dt.strftime("%A, %d %B %Y %H:%M") if dt is not None else entry.timestamp
        lines = [f"{when}  {badge}", "", entry.content]
        if entry.image:
            lines += ["", f"Photo: {entry.image}"]
        lines += ["", f"id: {entry.id}"]
        return "\n".join(lines)
    first_line = entry.content.splitlines()[0] if entry.content else ""
    photo = " [photo]" if entry.image else ""
    return f"  {when}  {badge:<12} {first_line[:60]}{photo}  ({entry.id[:8]})"


@click.group()
@click.version_option(version=__version__, package_name="daybook")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    help="YAML or JSON config file.",
)
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Where the journal is stored.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.pass_context
def main(ctx: click.Context, config_file: str, data_dir: str | None, log_level: str | None) -> None:
    """Daybook: a personal mood journal."""
    try:
        config = Config(config_file=config_file, data_dir=data_dir)
    except ConfigurationError as e:
        _fail(str(e))
    setup_logging_from_config(config, level=log_level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
@click.argument("content")
@click.option("--mood", "-m", type=MOOD_CHOICE, required=True, help="How the day felt.")
@click.option("--image", "-i", type=click.Path(dir_okay=False), default=None, help="Attach a photo.")
@click.pass_context
def add(ctx: click.Context, content: str, mood: str, image: str | None) -> None:
    """Write a new entry."""
    if not content.strip():
        _fail("Entry content cannot be empty.")

    async def action(repo: EntryRepository) -> None:
        image_ref = await repo.pick_image()
        if repo.error is not None:
            click.echo(f"Warning: {repo.error.user_message}; saving without a photo.", err=True)
            repo.clear_error()
        entry_id = await repo.add(content.strip(), mood.lower(), image_ref)
        click.echo(f"Saved entry {entry_id}")
        streak = repo.current_streak()
        if streak > 1:
            click.echo(f"{streak}-day streak!")

    _run(ctx, action, image=image)


@main.command()
@click.argument("entry_id")
@click.option("--content", "-c", default=None, help="Replace the text.")
@click.option("--mood", "-m", type=MOOD_CHOICE, default=None, help="Change the mood.")
@click.option("--image", "-i", type=click.Path(dir_okay=False), default=None, help="Replace the photo.")
@click.option("--remove-image", is_flag=True, help="Detach the photo.")
@click.pass_context
def edit(
    ctx: click.Context,
    entry_id: str,
    content: str | None,
    mood: str | None,
    image: str | None,
    remove_image: bool,
) -> None:
    """Edit an entry's text, mood or photo. The date never changes."""
    if image and remove_image:
        _fail("Use either --image or --remove-image, not both.")
    if content is not None and not content.strip():
        _fail("Entry content cannot be empty.")

    async def action(repo: EntryRepository) -> None:
        changes: dict[str, object] = {}
        if content is not None:
            changes["content"] = content.strip()
        if mood is not None:
            changes["mood"] = mood.lower()
        if remove_image:
            changes["image"] = None
        elif image:
            image_ref = await repo.pick_image()
            if repo.error is not None:
                _fail(repo.error.user_message)
            changes["image"] = image_ref
        if not changes:
            _fail("Nothing to change.")
        await repo.update(entry_id, **changes)
        click.echo(f"Updated entry {entry_id}")

    _run(ctx, action, image=image)


@main.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, entry_id: str, yes: bool) -> None:
    """Delete an entry permanently."""

    async def action(repo: EntryRepository) -> None:
        if repo.get_by_id(entry_id) is None:
            click.echo(f"No entry {entry_id}; nothing to delete.")
            return
        if not yes and not click.confirm("Delete this entry? This cannot be undone.", default=False):
            click.echo("Kept.")
            return
        await repo.delete(entry_id)
        click.echo(f"Deleted entry {entry_id}")

    _run(ctx, action)


@main.command()
@click.argument("entry_id")
@click.pass_context
def show(ctx: click.Context, entry_id: str) -> None:
    """Show one entry in full."""

    async def action(repo: EntryRepository) -> None:
        entry = repo.get_by_id(entry_id)
        if entry is None:
            _fail(f"No entry {entry_id}.")
        click.echo(_format_entry(entry, repo, full=True))

    _run(ctx, action)


@main.command(name="list")
@click.option("--by", "group", type=click.Choice(["day", "month"]), default="day", show_default=True)
@click.pass_context
def list_entries(ctx: click.Context, group: str) -> None:
    """Browse entries, newest day first."""

    async def action(repo: EntryRepository) -> None:
        if not len(repo):
            click.echo("No entries yet. Add one with 'daybook add'.")
            return
        if group == "day":
            for day, entries in repo.group_by_day().items():
                click.echo(day)
                for entry in entries:
                    click.echo(_format_entry(entry, repo))
        else:
            for month, entries in sorted(repo.group_by_month().items(), reverse=True):
                click.echo(f"{month}: {len(entries)} {'entry' if len(entries) == 1 else 'entries'}")

    _run(ctx, action)


@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show totals, streak, mood distribution and weekday activity."""

    async def action(repo: EntryRepository) -> None:
        click.echo(f"Entries: {len(repo)}")
        click.echo(f"This month: {repo.entries_this_month()}")
        click.echo(f"Current streak: {repo.current_streak()} day(s)")
        click.echo("")
        click.echo("Moods:")
        for bucket in repo.mood_data():
            click.echo(f"  {bucket.emoji} {bucket.label:<9} {bucket.count:>4}")
        click.echo("")
        click.echo("Weekdays:")
        for day in repo.weekday_counts():
            click.echo(f"  {day.name:<9} {day.count:>4} {'#' * day.count}")

    _run(ctx, action)


@main.command()
def moods() -> None:
    """List the moods you can pick from."""
    for option in MOOD_OPTIONS:
        click.echo(f"{option.emoji} {option.mood.value:<9} {option.label} ({option.color})")
