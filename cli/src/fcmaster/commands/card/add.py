import click

from client.router import Screen
from fcmaster.runtime import open_app, run_screen
from storage.entity.dto import CardColor

COLOR_CHOICES = [c.value for c in CardColor]


async def _add(title, tasks, color, due):
    async with open_app() as app:
        app.router.navigate(Screen.ADD_EDIT_FLASHCARD)
        draft = app.card_form.prepare_new()
        draft.title = title
        draft.tasks = tasks
        draft.color = CardColor(color)
        draft.due_date = due.date() if due else None
        return await app.card_form.save(draft)


@click.command('add')
@click.argument('title')
@click.option('--tasks', '-t', default='', help='Tasks or description')
@click.option('--color', '-c', default=CardColor.BLUE.value, type=click.Choice(COLOR_CHOICES), help='Card color')
@click.option('--due', '-u', default=None, type=click.DateTime(formats=['%Y-%m-%d']), help='Due date (YYYY-MM-DD)')
def card_add(title, tasks, color, due):
    """Create a flashcard."""
    card_id = run_screen(_add(title, tasks, color, due))
    click.echo(f"Created flashcard '{title.strip()}' ({card_id})")
