"""``flask shell`` with the catalog loaded.

The session starts with the models, schemas and services in scope, so the
catalog can be inspected and edited by hand::

    >>> authors.create({"name": "Mo Yan", "bio": "Chinese writer"})
    <Author 3 'Mo Yan'>
"""
import click
import flask
import konch
from flask.cli import with_appcontext

from . import models, schemas, services

LOGO = r"""
  ___           _        _
 | _ ) ___  ___| |__ ___| |_ ___ _ _ ___
 | _ \/ _ \/ _ \ / /(_-<|  _/ _ \ '_/ -_)
 |___/\___/\___/_\_\/__/ \__\___/_| \___|
""".strip(
    "\n"
)

# -----------------------------------------------------------------------------


def make_sections(app):
    """Group the shell namespace by where each name comes from."""
    session = models.db.session

    return {
        "Flask": app.make_shell_context(),
        "Models": {
            "db": models.db,
            "session": session,
            "Author": models.Author,
            "Book": models.Book,
        },
        "Schemas": {
            "AuthorSchema": schemas.AuthorSchema,
            "BookSchema": schemas.BookSchema,
        },
        "Services": {
            "authors": services.AuthorService(session),
            "books": services.BookService(session),
        },
        "Additional": app.config["BOOKSTORE_SHELL_CONTEXT"],
    }


def describe_sections(sections):
    lines = []
    for title, names in sections.items():
        if not names:
            continue

        lines.append("")
        lines.append(click.style(f"{title}:", bold=True))
        lines.append(", ".join(sorted(names, key=str.lower)))

    return "\n".join(lines)


def make_banner(app):
    database_uri = models.db.engine.url.render_as_string(hide_password=True)
    database_uri = click.style(database_uri, fg="green")
    app_name = click.style(app.name, fg="green")
    return f"{LOGO}\nFlask app: {app_name}, Database: {database_uri}"


# -----------------------------------------------------------------------------


@click.command(
    help="Run an interactive shell with the catalog models and services."
)
@click.option(
    "--shell",
    "-s",
    type=click.Choice(sorted(konch.SHELL_MAP)),
    default="auto",
)
@click.option(
    "--sqlalchemy-echo",
    is_flag=True,
    help="Print the SQL sent to the database.",
)
@with_appcontext
def cli(shell, sqlalchemy_echo):
    app = flask.current_app._get_current_object()
    if sqlalchemy_echo:
        models.db.engine.echo = True

    sections = make_sections(app)

    context = {}
    for section in sections.values():
        context.update(section)

    konch.start(
        context=context,
        context_format=lambda _context: describe_sections(sections),
        banner=make_banner(app),
        shell=shell,
        prompt=app.config["BOOKSTORE_SHELL_PROMPT"],
    )
