"""
Helper script for generating a bearer token.

Be sure that you are using the same token scheme (and, for signed tokens, the
same secret) when running this script as when you run the app.

.. code-block:: bash

   $ TOKEN_SCHEME=signed JWT_SECRET=foosecret python generate_token.py
   Identity: teacher@example.com
   Role (ROLE_STUDENT, ROLE_TEACHER) [ROLE_STUDENT]: ROLE_TEACHER

   eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...


Use the token in your requests to authorized endpoints. Set the header
``Authorization: Bearer [token]``.

"""

import click

from quizplatform import config, tokens
from quizplatform.domain import Principal, Role


@click.command()
@click.option('--identity', prompt='Identity')
@click.option('--role', prompt='Role',
              type=click.Choice([role.value for role in Role]),
              default=Role.STUDENT.value)
@click.option('--scheme', default=config.TOKEN_SCHEME,
              type=click.Choice(['opaque', 'signed']))
@click.option('--ttl', default=config.TOKEN_TTL_SECONDS,
              help='Lifetime of signed tokens, in seconds.')
def generate_token(identity: str, role: str, scheme: str, ttl: int) -> None:
    """Generate an auth token for dev/testing purposes."""
    codec = tokens.codec_from_config(scheme, config.JWT_SECRET, ttl)
    try:
        token = codec.encode(Principal(identity=identity, role=Role(role)))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--identity') from e
    click.echo(token)


if __name__ == '__main__':
    generate_token()
