import click

from client.errors import StoreError
from client.router import Screen
from fcmaster.runtime import open_app, run_screen
from fcmaster.time_util import format_due_date, utc_to_local


async def _get(card_id):
    async with open_app() as app:
        app.router.navigate(Screen.HOME)
        await app.cards.wait_for_snapshot()
        card = app.cards.find(card_id)
        if card is None:
            raise StoreError(f"Flashcard '{card_id}' not found")
        return card


@click.command('get')
@click.argument('card_id')
def card_get(card_id):
    """Show flashcard details."""
    card = run_screen(_get(card_id))

    click.echo(f"ID:        {card.id}")
    click.echo(f"Title:     {card.title}")
    click.echo(f"Status:    {card.status.value}")
    click.echo(f"Color:     {card.color.value}")
    click.echo(f"Due:       {format_due_date(card.due_date)}")
    click.echo(f"Tasks:     {card.tasks}")
    if card.completed_at:
        click.echo(f"Completed: {utc_to_local(card.completed_at)}")
    if card.created_at:
        click.echo(f"Created:   {utc_to_local(card.created_at)}")
    if card.updated_at:
        click.echo(f"Updated:   {utc_to_local(card.updated_at)}")
