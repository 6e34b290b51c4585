import click

from client.errors import StoreError
from client.router import Screen
from fcmaster.runtime import open_app, run_screen
from storage.entity.dto import CardColor

from .add import COLOR_CHOICES


async def _edit(card_id, title, tasks, color, due, clear_due):
    async with open_app() as app:
        app.router.navigate(Screen.HOME)
        await app.cards.wait_for_snapshot()
        card = app.cards.find(card_id)
        if card is None:
            raise StoreError(f"Flashcard '{card_id}' not found")
        route = app.router.navigate(Screen.ADD_EDIT_FLASHCARD, flashcard=card)
        existing = route.params["flashcard"]
        draft = app.card_form.prepare_edit(existing)
        if title is not None:
            draft.title = title
        if tasks is not None:
            draft.tasks = tasks
        if color is not None:
            draft.color = CardColor(color)
        if due is not None:
            draft.due_date = due.date()
        if clear_due:
            draft.due_date = None
        await app.card_form.save(draft, existing)
        return draft


@click.command('edit')
@click.argument('card_id')
@click.option('--title', '-n', default=None, help='New title')
@click.option('--tasks', '-t', default=None, help='New tasks or description')
@click.option('--color', '-c', default=None, type=click.Choice(COLOR_CHOICES), help='New color')
@click.option('--due', '-u', default=None, type=click.DateTime(formats=['%Y-%m-%d']), help='New due date (YYYY-MM-DD)')
@click.option('--clear-due', is_flag=True, default=False, help='Remove the due date')
def card_edit(card_id, title, tasks, color, due, clear_due):
    """Update a flashcard."""
    draft = run_screen(_edit(card_id, title, tasks, color, due, clear_due))
    click.echo(f"Updated flashcard '{draft.title.strip()}' ({card_id})")
