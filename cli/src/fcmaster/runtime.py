"""Builds the client app for one CLI command and runs its screen coroutine."""

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, TypeVar

import click
from loguru import logger

from client.app import FlashcardApp
from client.errors import FlashcardError
from fcmaster.config import get_config
from storage.service.auth import SqlAuthProvider
from storage.service.document_store import SqlDocumentStore

T = TypeVar("T")


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level, format="<level>{level: <8}</level> {name}: {message}")


@asynccontextmanager
async def open_app(watch: bool = False) -> AsyncIterator[FlashcardApp]:
    """Start the app and wait until the session state is known.

    With ``watch`` the live query polls for writes from other processes and
    the session file is re-read, so a sign-out elsewhere ends the session here.
    """
    config = get_config()
    auth = SqlAuthProvider(session_file=config["session_file"])
    store = SqlDocumentStore(poll_interval=config["poll_interval"] if watch else None)
    app = FlashcardApp(auth, store)
    app.start()
    follow_task = None
    try:
        await app.session.wait_ready()
        if watch:
            follow_task = asyncio.create_task(_follow_session_file(auth, config["poll_interval"]))
        yield app
    finally:
        if follow_task is not None:
            follow_task.cancel()
        app.close()
        store.close()


async def _follow_session_file(auth: SqlAuthProvider, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        auth.reload_session()


def run_screen(screen: Awaitable[T]) -> T:
    """Run a screen coroutine; surface flashcard errors as CLI errors."""
    try:
        return asyncio.run(screen)
    except FlashcardError as e:
        raise click.ClickException(e.message)
