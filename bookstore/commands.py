"""``flask`` sub-commands for managing the catalog database."""
import click
import flask
from flask.cli import with_appcontext

from .models import Author, Book, db

# -----------------------------------------------------------------------------

SAMPLE_CATALOG = (
    {
        "name": "Jiang Rong",
        "bio": "Jiang Rong is a Chinese writer",
        "books": (
            {
                "title": "Wolf Totem",
                "description": (
                    "Wolf Totem is a novel by Jiang Rong, published in 2004."
                ),
                "published_year": 2004,
            },
        ),
    },
    {
        "name": "Alex Haley",
        "bio": "Alex Haley is an American writer",
        "books": (
            {
                "title": "Roots: The Saga of an American Family",
                "description": (
                    "Roots is a novel by Alex Haley, published in 1976."
                ),
                "published_year": 1976,
            },
        ),
    },
)

# -----------------------------------------------------------------------------


@click.command("init-db", help="Create the catalog tables.")
@click.option("--drop", is_flag=True, help="Drop existing tables first.")
@with_appcontext
def init_db(drop):
    if drop:
        db.drop_all()

    db.create_all()
    click.echo("Initialized the database.")


@click.command(help="Replace the catalog contents with sample data.")
@with_appcontext
def seed():
    logger = flask.current_app.logger
    logger.info("seeding database")

    db.create_all()
    db.session.query(Book).delete()
    db.session.query(Author).delete()

    for entry in SAMPLE_CATALOG:
        author = Author(name=entry["name"], bio=entry["bio"])
        db.session.add(author)
        for book in entry["books"]:
            db.session.add(Book(author=author, **book))

    db.session.commit()

    logger.info("seeded %d authors", len(SAMPLE_CATALOG))
    click.echo("Seeded the database.")


def init_app(app):
    app.cli.add_command(init_db)
    app.cli.add_command(seed)
