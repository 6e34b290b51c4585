"""Sign-up command - create an account and its profile."""

import click

from client.router import Screen
from fcmaster.runtime import open_app, run_screen


async def _sign_up(email, password, confirm_password, first_name, last_name):
    async with open_app() as app:
        app.router.navigate(Screen.SIGN_UP)
        return await app.account.sign_up(email, password, confirm_password, first_name, last_name)


@click.command("signup")
@click.option("--first-name", prompt="First name", default="", show_default=False)
@click.option("--last-name", prompt="Last name", default="", show_default=False)
@click.option("--email", prompt="Email", default="", show_default=False)
@click.option("--password", prompt="Password", hide_input=True, default="", show_default=False)
@click.option("--confirm-password", prompt="Confirm password", hide_input=True, default="", show_default=False)
def signup(first_name, last_name, email, password, confirm_password):
    """Create an account."""
    identity = run_screen(_sign_up(email.strip(), password, confirm_password, first_name.strip(), last_name.strip()))
    click.echo(f"Welcome, {identity.display_name}! You are signed in as {identity.email}")
