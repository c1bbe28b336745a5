import os
import pytest
from flask.testing import FlaskClient

from bookstore import create_app
from bookstore.models import Author, Book
from bookstore.models import db as database
from bookstore.testing import ApiClient

# -----------------------------------------------------------------------------


@pytest.fixture
def app():
    return create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": os.environ.get(
                "DATABASE_URL", "sqlite://"
            ),
        }
    )


@pytest.fixture
def db(app):
    with app.app_context():
        database.create_all()

        yield database

        database.session.remove()
        database.drop_all()


@pytest.fixture
def client(app, db):
    app.test_client_class = ApiClient
    return app.test_client()


@pytest.fixture
def base_client(app, db):
    app.test_client_class = FlaskClient
    return app.test_client()


# -----------------------------------------------------------------------------


@pytest.fixture
def make_author(db):
    def make(name="Jiang Rong", bio="Jiang Rong is a Chinese writer"):
        author = Author(name=name, bio=bio)
        db.session.add(author)
        db.session.commit()
        return author

    return make


@pytest.fixture
def make_book(db):
    def make(
        author,
        title="Wolf Totem",
        description="A novel about the Mongolian steppe.",
        published_year=2004,
    ):
        book = Book(
            author=author,
            title=title,
            description=description,
            published_year=published_year,
        )
        db.session.add(book)
        db.session.commit()
        return book

    return make
