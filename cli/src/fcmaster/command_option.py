import click
from dotenv import load_dotenv

from fcmaster.commands.signin import signin
from fcmaster.commands.signup import signup
from fcmaster.commands.signout import signout
from fcmaster.commands.home import home
from fcmaster.commands.profile import profile_group
from fcmaster.commands.card.click import card_group
from fcmaster.runtime import configure_logging
from fcmaster.settings import load_config

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS)
def cli():
    """Flashcard Master: flashcards and tasks from the command line."""
    load_dotenv()
    configure_logging(load_config()["log_level"])


# Register commands
cli.add_command(signin)
cli.add_command(signup)
cli.add_command(signout)
cli.add_command(home)
cli.add_command(profile_group)
cli.add_command(card_group)
