"""
Script for creating a new user, including teachers.

Self-registration over HTTP only ever creates students, so this is how
teacher accounts are made.

.. warning: The user is written to ``DATABASE_URI``; without it, nothing is
   persisted.

"""

import click

from quizplatform import config
from quizplatform.controllers import authentication
from quizplatform.domain import Role
from quizplatform.exceptions import AlreadyExistsError
from quizplatform.services import repository_from_config


@click.command()
@click.option('--identity', prompt='E-mail address')
@click.option('--password', prompt='Password', hide_input=True,
              confirmation_prompt=True)
@click.option('--role', prompt='Role',
              type=click.Choice([role.value for role in Role]),
              default=Role.TEACHER.value)
@click.option('--database-uri', default=config.DATABASE_URI)
def create_user(identity: str, password: str, role: str,
                database_uri: str) -> None:
    """Create a new user."""
    if not database_uri:
        raise click.UsageError('Set DATABASE_URI or pass --database-uri')
    repo = repository_from_config(database_uri)
    try:
        user = authentication.register(repo, identity, password, Role(role))
    except (AlreadyExistsError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    click.echo(f'Created {user.role.value} {user.identity}')


if __name__ == '__main__':
    create_user()
