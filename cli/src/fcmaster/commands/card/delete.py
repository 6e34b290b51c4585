import click

from client.router import Screen
from fcmaster.runtime import open_app, run_screen


async def _delete(card_id):
    async with open_app() as app:
        app.router.navigate(Screen.HOME)
        return await app.card_actions.delete(card_id)


@click.command('delete')
@click.argument('card_id')
def card_delete(card_id):
    """Delete a flashcard. There is no undo."""
    if run_screen(_delete(card_id)):
        click.echo(f"Deleted flashcard {card_id}")
    else:
        raise click.ClickException(f"Could not delete flashcard {card_id}")
