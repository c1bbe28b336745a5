import datetime as dt

from marshmallow import EXCLUDE, Schema, fields, validate

from .models import MAX_ID

# -----------------------------------------------------------------------------

MAX_TEXT_LENGTH = 255

MIN_PUBLISHED_YEAR = 1000
MAX_YEARS_AHEAD = 10

# -----------------------------------------------------------------------------


def validate_published_year(value):
    """Check a publication year against a bound that moves with the calendar."""
    max_year = dt.date.today().year + MAX_YEARS_AHEAD
    validate.Range(min=MIN_PUBLISHED_YEAR, max=max_year)(value)


class UtcDateTime(fields.DateTime):
    """A datetime dumped with an explicit UTC offset.

    SQLite returns stored timestamps without their zone; those are UTC.
    """

    def _serialize(self, value, attr, obj, **kwargs):
        if value is not None:
            if value.tzinfo is None:
                value = value.replace(tzinfo=dt.timezone.utc)
            else:
                value = value.astimezone(dt.timezone.utc)

        return super()._serialize(value, attr, obj, **kwargs)


# -----------------------------------------------------------------------------


class CatalogSchema(Schema):
    class Meta:
        # Clients may echo back read-only fields such as ``id``.
        unknown = EXCLUDE

    id = fields.Integer(dump_only=True)
    created_at = UtcDateTime(data_key="createdAt", dump_only=True)
    updated_at = UtcDateTime(data_key="updatedAt", dump_only=True)


class AuthorSchema(CatalogSchema):
    name = fields.String(
        required=True,
        validate=validate.Length(min=1, max=MAX_TEXT_LENGTH),
        error_messages={"required": "Name is required."},
    )
    bio = fields.String(
        required=True,
        validate=validate.Length(min=1),
        error_messages={"required": "Bio is required."},
    )
    books = fields.List(
        fields.Nested(lambda: BookSchema(exclude=("author",))),
        dump_only=True,
    )


class BookSchema(CatalogSchema):
    title = fields.String(
        required=True,
        validate=validate.Length(min=1, max=MAX_TEXT_LENGTH),
        error_messages={"required": "Title is required."},
    )
    author_id = fields.Integer(
        data_key="authorId",
        required=True,
        strict=True,
        validate=(
            validate.Range(
                min=1, error="Author ID must be a positive integer."
            ),
            validate.Range(max=MAX_ID, error="Author ID is out of range."),
        ),
        error_messages={"required": "Author ID is required."},
    )
    description = fields.String(
        required=True,
        validate=validate.Length(min=1),
        error_messages={"required": "Description is required."},
    )
    published_year = fields.Integer(
        data_key="publishedYear",
        required=True,
        strict=True,
        validate=validate_published_year,
        error_messages={"required": "Published year is required."},
    )
    author = fields.Nested(
        lambda: AuthorSchema(exclude=("books",)), dump_only=True
    )


author_schema = AuthorSchema()
book_schema = BookSchema()
