"""Profile screen: account details and account deletion."""

import click
from loguru import logger

from client.errors import FlashcardError
from client.router import Screen
from fcmaster.runtime import open_app, run_screen
from fcmaster.time_util import utc_to_local


async def _show_profile():
    async with open_app() as app:
        app.router.navigate(Screen.PROFILE)
        return app.session.identity, await app.account.load_profile()


async def _delete_account():
    async with open_app() as app:
        app.router.navigate(Screen.PROFILE)
        try:
            return await app.account.delete_account()
        except FlashcardError as e:
            logger.error("Error deleting account: {}", e.message)
            raise click.ClickException("Failed to delete account. Please try again.")


@click.group('profile', invoke_without_command=True)
@click.pass_context
def profile_group(ctx):
    """Show profile information."""
    if ctx.invoked_subcommand is not None:
        return
    identity, profile = run_screen(_show_profile())
    name = f"{profile.first_name} {profile.last_name}" if profile else identity.display_name
    click.echo(f"Name:    {name or 'Not set'}")
    click.echo(f"Email:   {identity.email}")
    click.echo(f"User ID: {identity.uid}")
    if profile and profile.created_at:
        click.echo(f"Joined:  {utc_to_local(profile.created_at)}")


@profile_group.command('delete')
@click.confirmation_option(prompt='Are you sure you want to delete your account? This action cannot be '
                                  'undone and all your data will be permanently lost.')
def profile_delete():
    """Delete your account and all of your flashcards."""
    identity = run_screen(_delete_account())
    click.echo(f"Deleted account {identity.email}")
