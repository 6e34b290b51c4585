"""Sign-in command - start a session for an existing account."""

import click

from client.router import Screen
from fcmaster.runtime import open_app, run_screen


async def _sign_in(email: str, password: str):
    async with open_app() as app:
        app.router.navigate(Screen.SIGN_IN)
        return await app.account.sign_in(email.strip(), password)


@click.command("signin")
@click.option("--email", prompt="Email", help="Account email.")
@click.option("--password", prompt="Password", hide_input=True, help="Account password.")
def signin(email, password):
    """Sign in to continue."""
    identity = run_screen(_sign_in(email, password))
    click.echo(f"Signed in as {identity.display_name or identity.email}")
