"""Home screen: greeting plus incomplete and completed flashcards."""

import asyncio
from typing import List, Sequence

import click
from tabulate import tabulate

from client.card_subscription import completed_cards, incomplete_cards
from client.router import Screen
from fcmaster.runtime import open_app, run_screen
from fcmaster.time_util import format_due_date, utc_to_local
from storage.entity.dto import Card, Identity


def render_home(identity: Identity, cards: Sequence[Card]) -> str:
    """Render the home view for one snapshot of cards."""
    incomplete = incomplete_cards(cards)
    completed = completed_cards(cards)

    lines = [f"Hello {identity.display_name or 'User'}!", "Manage your flashcards and stay organized", ""]

    lines.append(f"Incomplete ({len(incomplete)})")
    if incomplete:
        lines.append(_card_table(incomplete, completed=False))
    else:
        lines.append("  No incomplete flashcards")
    lines.append("")

    lines.append(f"Completed ({len(completed)})")
    if completed:
        lines.append(_card_table(completed, completed=True))
    else:
        lines.append("  No completed flashcards")
    return "\n".join(lines)


def _card_table(cards: List[Card], completed: bool) -> str:
    table = []
    for c in cards:
        row = [c.id, c.title, c.tasks, c.color.value, format_due_date(c.due_date)]
        if completed:
            row.append(utc_to_local(c.completed_at))
        table.append(row)
    headers = ["ID", "Title", "Tasks", "Color", "Due"]
    if completed:
        headers.append("Completed")
    return tabulate(table, headers=headers, tablefmt="simple")


async def _show_home(watch: bool) -> None:
    async with open_app(watch=watch) as app:
        app.router.navigate(Screen.HOME)
        identity = app.session.identity
        cards = await app.cards.wait_for_snapshot()
        click.echo(render_home(identity, cards))
        if not watch:
            return

        def redraw(snapshot):
            click.clear()
            click.echo(render_home(identity, snapshot))

        unsubscribe = app.cards.subscribe(redraw)
        try:
            while app.session.identity is not None:
                await asyncio.sleep(1)
        finally:
            unsubscribe()


@click.command("home")
@click.option("--watch", "-w", is_flag=True, default=False, help="Keep the view open and redraw on every change.")
def home(watch):
    """Show your flashcards grouped by completion state."""
    try:
        run_screen(_show_home(watch))
    except KeyboardInterrupt:
        pass
