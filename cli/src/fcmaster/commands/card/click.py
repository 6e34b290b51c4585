import click

from .add import card_add
from .get import card_get
from .edit import card_edit
from .complete import card_complete
from .delete import card_delete

@click.group('card')
def card_group():
    """Manage flashcards."""
    pass

card_group.add_command(card_add)
card_group.add_command(card_get)
card_group.add_command(card_edit)
card_group.add_command(card_complete)
card_group.add_command(card_delete)
