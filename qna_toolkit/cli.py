#!/usr/bin/env python3
"""
Command-line interface for the QnA toolkit.

Provides database setup and moderation commands for deleting questions and
answers and inspecting the recorded delete history.
"""

import asyncio
import logging
import sys
from typing import Any, Awaitable, List, NoReturn, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import get_config
from .qna import (
    ContentType,
    DeleteHistory,
    NotFoundException,
    QnAStorage,
    Question,
    SQLDeleteHistoryRepository,
)
from .soft_delete import SoftDeleteError

console = Console()


def _run(coro: Awaitable[Any]) -> Any:
    """Run a coroutine from a synchronous click command."""

    async def _main() -> Any:
        return await coro

    return asyncio.run(_main())


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    sys.exit(1)


def _history_table(title: str, histories: List[DeleteHistory]) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("Content", style="cyan")
    table.add_column("ID", style="green")
    table.add_column("Deleted by", style="magenta")
    table.add_column("Deleted at", style="dim")

    for history in histories:
        table.add_row(
            history.content_type.value,
            str(history.content_id),
            history.deleted_by.user_id,
            history.create_date.isoformat(),
        )

    return table


async def _open_storage(database_url: Optional[str]) -> QnAStorage:
    storage = QnAStorage(database_url)
    await storage.initialize()
    return storage


async def _delete_question(
    database_url: Optional[str], user_id: int, question_id: int
) -> List[DeleteHistory]:
    storage = await _open_storage(database_url)
    try:
        with storage.session() as session:
            service = storage.create_service(session)
            await service.delete_question(user_id, question_id)

            history_repository = SQLDeleteHistoryRepository(session)
            histories = await history_repository.find_by_content(
                ContentType.QUESTION, question_id
            )
            deleted_at = histories[0].create_date
            question = session.get(Question, question_id)
            for answer in question.answers if question else []:
                # answers deleted before the question are not part of this run
                histories.extend(
                    h
                    for h in await history_repository.find_by_content(
                        ContentType.ANSWER, answer.id
                    )
                    if h.create_date == deleted_at
                )
            return histories
    finally:
        storage.dispose()


async def _delete_answer(
    database_url: Optional[str], user_id: int, answer_id: int
) -> List[DeleteHistory]:
    storage = await _open_storage(database_url)
    try:
        with storage.session() as session:
            await storage.create_service(session).delete_answer(user_id, answer_id)
            return await SQLDeleteHistoryRepository(session).find_by_content(
                ContentType.ANSWER, answer_id
            )
    finally:
        storage.dispose()


async def _show_history(
    database_url: Optional[str], content_type: ContentType, content_id: int
) -> List[DeleteHistory]:
    storage = await _open_storage(database_url)
    try:
        with storage.session() as session:
            return await SQLDeleteHistoryRepository(session).find_by_content(
                content_type, content_id
            )
    finally:
        storage.dispose()


database_url_option = click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy database URL (defaults to QNA_DATABASE_URL).",
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """QnA Toolkit - Deletion workflow for question/answer forums."""
    logging.basicConfig(level=get_config().log_level)

    if ctx.invoked_subcommand is None:
        console.print(
            Panel.fit(
                f"[bold blue]QnA Toolkit[/bold blue] v{__version__}\n"
                "[dim]Deletion workflow for question/answer forums[/dim]\n\n"
                "Use [bold]qna --help[/bold] to see available commands.",
                border_style="blue",
            )
        )


@cli.group()
def config() -> None:
    """Inspect toolkit configuration."""
    pass


@config.command("show")
@click.option("--format", type=click.Choice(["table", "json", "yaml"]), default="table")
def config_show(format: str) -> None:
    """Display current configuration."""
    config_dict = get_config().to_dict()

    if format == "json":
        console.print_json(data=config_dict)
    elif format == "yaml":
        import yaml  # type: ignore[import-untyped]

        console.print(yaml.dump(config_dict, default_flow_style=False))
    else:
        table = Table(title="QnA Configuration", show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        for setting, value in config_dict.items():
            if isinstance(value, bool):
                value = "✓" if value else "✗"
            table.add_row(setting, str(value))

        console.print(table)


@cli.group()
def db() -> None:
    """Manage the QnA database."""
    pass


@db.command("init")
@database_url_option
def db_init(database_url: Optional[str]) -> None:
    """Create the QnA tables if they do not exist."""
    storage = _run(_open_storage(database_url))
    storage.dispose()
    console.print(f"[green]✓ Database ready at {storage.connection_string}[/green]")


@cli.group()
def question() -> None:
    """Question moderation commands."""
    pass


@question.command("delete")
@click.option("--user-id", type=int, required=True, help="ID of the acting user")
@click.option("--question-id", type=int, required=True, help="Question to delete")
@database_url_option
def question_delete(
    database_url: Optional[str], user_id: int, question_id: int
) -> None:
    """Delete a question together with its answers."""
    try:
        histories = _run(_delete_question(database_url, user_id, question_id))
    except (NotFoundException, SoftDeleteError) as e:
        _fail(f"Cannot delete question {question_id}: {e}")

    console.print(f"[green]✓ Question {question_id} deleted[/green]")
    console.print(_history_table("Delete History", histories))


@cli.group()
def answer() -> None:
    """Answer moderation commands."""
    pass


@answer.command("delete")
@click.option("--user-id", type=int, required=True, help="ID of the acting user")
@click.option("--answer-id", type=int, required=True, help="Answer to delete")
@database_url_option
def answer_delete(database_url: Optional[str], user_id: int, answer_id: int) -> None:
    """Delete a single answer."""
    try:
        histories = _run(_delete_answer(database_url, user_id, answer_id))
    except (NotFoundException, SoftDeleteError) as e:
        _fail(f"Cannot delete answer {answer_id}: {e}")

    console.print(f"[green]✓ Answer {answer_id} deleted[/green]")
    console.print(_history_table("Delete History", histories))


@cli.group()
def history() -> None:
    """Delete history commands."""
    pass


@history.command("show")
@click.argument(
    "content_type",
    type=click.Choice([c.value for c in ContentType], case_sensitive=False),
)
@click.argument("content_id", type=int)
@database_url_option
def history_show(
    database_url: Optional[str], content_type: str, content_id: int
) -> None:
    """Show the delete history of one question or answer."""
    kind = ContentType(content_type.upper())
    histories = _run(_show_history(database_url, kind, content_id))
    label = f"{kind.value} {content_id}"

    if not histories:
        console.print(f"[yellow]No delete history for {label}[/yellow]")
        return

    console.print(_history_table(label, histories))


if __name__ == "__main__":
    cli()
