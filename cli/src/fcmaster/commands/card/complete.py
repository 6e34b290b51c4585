import click

from client.router import Screen
from fcmaster.runtime import open_app, run_screen


async def _complete(card_id):
    async with open_app() as app:
        app.router.navigate(Screen.HOME)
        return await app.card_actions.complete(card_id)


@click.command('complete')
@click.argument('card_id')
def card_complete(card_id):
    """Mark a flashcard as completed."""
    if run_screen(_complete(card_id)):
        click.echo(f"Completed flashcard {card_id}")
    else:
        raise click.ClickException(f"Could not complete flashcard {card_id}")
