import datetime as dt
import pytest
from marshmallow import ValidationError

from bookstore.schemas import AuthorSchema, BookSchema, validate_published_year

# -----------------------------------------------------------------------------


@pytest.fixture
def author_schema():
    return AuthorSchema()


@pytest.fixture
def book_schema():
    return BookSchema()


@pytest.fixture
def book_data():
    return {
        "title": "Wolf Totem",
        "authorId": 1,
        "description": "A novel.",
        "publishedYear": 2004,
    }


# -----------------------------------------------------------------------------


def test_author_load(author_schema):
    assert author_schema.load({"name": "Jiang Rong", "bio": "Writer"}) == {
        "name": "Jiang Rong",
        "bio": "Writer",
    }


def test_author_load_missing_fields(author_schema):
    with pytest.raises(ValidationError) as excinfo:
        author_schema.load({})

    assert excinfo.value.messages == {
        "name": ["Name is required."],
        "bio": ["Bio is required."],
    }


@pytest.mark.parametrize(
    "data",
    (
        {"name": "", "bio": "Writer"},
        {"name": "x" * 256, "bio": "Writer"},
        {"name": "Jiang Rong", "bio": ""},
        {"name": None, "bio": "Writer"},
        {"name": 42, "bio": "Writer"},
    ),
)
def test_author_load_invalid(author_schema, data):
    with pytest.raises(ValidationError):
        author_schema.load(data)


def test_author_name_max_length(author_schema):
    data = author_schema.load({"name": "x" * 255, "bio": "Writer"})
    assert len(data["name"]) == 255


def test_author_partial(author_schema):
    assert author_schema.load({}, partial=True) == {}
    assert author_schema.load({"bio": "New bio"}, partial=True) == {
        "bio": "New bio"
    }

    with pytest.raises(ValidationError):
        author_schema.load({"name": ""}, partial=True)


def test_author_ignores_unknown_and_read_only(author_schema):
    data = author_schema.load(
        {
            "id": 3,
            "name": "Jiang Rong",
            "bio": "Writer",
            "books": [],
            "createdAt": "2020-01-01T00:00:00",
            "nickname": "JR",
        }
    )
    assert data == {"name": "Jiang Rong", "bio": "Writer"}


def test_book_load(book_schema, book_data):
    assert book_schema.load(book_data) == {
        "title": "Wolf Totem",
        "author_id": 1,
        "description": "A novel.",
        "published_year": 2004,
    }


def test_book_load_missing_fields(book_schema):
    with pytest.raises(ValidationError) as excinfo:
        book_schema.load({})

    assert set(excinfo.value.messages) == {
        "title",
        "authorId",
        "description",
        "publishedYear",
    }


@pytest.mark.parametrize(
    ("field", "value"),
    (
        ("title", ""),
        ("title", "x" * 256),
        ("authorId", 0),
        ("authorId", -3),
        ("authorId", "1"),
        ("authorId", 1.5),
        ("description", ""),
        ("publishedYear", 999),
        ("publishedYear", "2004"),
        ("publishedYear", None),
    ),
)
def test_book_load_invalid(book_schema, book_data, field, value):
    book_data[field] = value

    with pytest.raises(ValidationError) as excinfo:
        book_schema.load(book_data)

    assert set(excinfo.value.messages) == {field}


def test_book_partial(book_schema):
    assert book_schema.load({"publishedYear": 1976}, partial=True) == {
        "published_year": 1976
    }


def test_validate_published_year():
    this_year = dt.date.today().year

    validate_published_year(1000)
    validate_published_year(this_year + 10)

    for year in (999, this_year + 11):
        with pytest.raises(ValidationError):
            validate_published_year(year)


def test_dump_author(author_schema):
    class Stub:
        pass

    book = Stub()
    book.__dict__.update(
        id=1,
        title="Wolf Totem",
        author_id=1,
        description="A novel.",
        published_year=2004,
        created_at=dt.datetime(2024, 1, 1),
        updated_at=dt.datetime(2024, 1, 2),
    )
    author = Stub()
    author.__dict__.update(
        id=1,
        name="Jiang Rong",
        bio="Writer",
        created_at=dt.datetime(2024, 1, 1),
        updated_at=dt.datetime(2024, 1, 1),
        books=[book],
    )
    book.author = author

    assert author_schema.dump(author) == {
        "id": 1,
        "name": "Jiang Rong",
        "bio": "Writer",
        "createdAt": "2024-01-01T00:00:00+00:00",
        "updatedAt": "2024-01-01T00:00:00+00:00",
        "books": [
            {
                "id": 1,
                "title": "Wolf Totem",
                "authorId": 1,
                "description": "A novel.",
                "publishedYear": 2004,
                "createdAt": "2024-01-01T00:00:00+00:00",
                "updatedAt": "2024-01-02T00:00:00+00:00",
            }
        ],
    }


def test_dump_timestamps_in_utc(book_schema):
    class Stub:
        pass

    book = Stub()
    book.__dict__.update(
        created_at=dt.datetime(
            2024, 1, 1, 8, tzinfo=dt.timezone(dt.timedelta(hours=8))
        ),
        updated_at=None,
    )

    data = book_schema.dump(book)
    assert data["createdAt"] == "2024-01-01T00:00:00+00:00"
    assert data["updatedAt"] is None
