"""Sign-out command - end the current session."""

import click

from client.router import Screen
from fcmaster.runtime import open_app, run_screen


async def _sign_out() -> bool:
    async with open_app() as app:
        if app.session.identity is None:
            return False
        app.router.navigate(Screen.PROFILE)
        await app.account.sign_out()
        return True


@click.command("signout")
def signout():
    """End the current session."""
    if run_screen(_sign_out()):
        click.echo("Signed out.")
    else:
        click.echo("Not signed in.")
