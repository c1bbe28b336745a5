from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import NoResultFound

from .exceptions import ValidationError
from .models import MAX_ID, Author, Book

# -----------------------------------------------------------------------------


class ModelRepository:
    """Data access for a single SQLAlchemy model.

    A repository is bound to an explicit session rather than reaching for a
    global one. Reads eagerly load the relationships named in
    :py:attr:`eager_relationships`, and every write commits before returning.

    :param session: The SQLAlchemy session to use.
    """

    #: A declarative SQLAlchemy model.
    model = None

    #: Relationship attributes loaded alongside every item.
    eager_relationships = ()

    def __init__(self, session):
        self.session = session

    @property
    def query_raw(self):
        """The base query, without query options."""
        return self.session.query(self.model)

    @property
    def query(self):
        """The query for the repository, with eager loading applied."""
        return self.query_raw.options(*self.query_options)

    @property
    def query_options(self):
        return tuple(
            selectinload(getattr(self.model, relationship))
            for relationship in self.eager_relationships
        )

    def list(self):
        """Retrieve every item, newest first.

        :return: The list of items.
        :rtype: list
        """
        return self.sort_list_query(self.query).all()

    def sort_list_query(self, query):
        # Break ties on the ID so the order is stable for rows created within
        # the same clock tick.
        return query.order_by(
            self.model.created_at.desc(), self.model.id.desc()
        )

    def is_storable_id(self, id):
        # Larger values overflow the driver before reaching the database.
        return 0 < id <= MAX_ID

    def get(self, id):
        """Get an item by ID, or ``None`` if there is no such item."""
        if not self.is_storable_id(id):
            return None

        return self.query.filter(self.model.id == id).one_or_none()

    def get_or_raise(self, id):
        """Get an item by ID.

        :raises NoResultFound: If there is no such item.
        """
        if not self.is_storable_id(id):
            raise NoResultFound(f"no {self.model.__name__} with id {id}")

        return self.query.filter(self.model.id == id).one()

    def exists(self, id):
        if not self.is_storable_id(id):
            return False

        count = (
            self.session.query(func.count(self.model.id))
            .filter(self.model.id == id)
            .scalar()
        )
        return count > 0

    def create(self, data):
        """Insert an item built from validated data.

        :param dict data: The deserialized data.
        :return: The created item, with relationships loaded.
        """
        item = self.model(**data)
        self.session.add(item)
        self.commit(data)

        return self.get_or_raise(item.id)

    def update(self, id, data):
        """Apply a partial update to the item with the given ID.

        Fields absent from `data` are left as they are.

        :param id: The item ID.
        :param dict data: The deserialized data.
        :return: The updated item, with relationships loaded.
        :raises NoResultFound: If there is no such item.
        """
        item = self.get_or_raise(id)
        for key, value in data.items():
            setattr(item, key, value)

        self.commit(data)

        return self.get_or_raise(id)

    def delete(self, id):
        """Delete the item with the given ID.

        This issues a single ``DELETE`` statement, so dependent rows are
        removed by the database's own ``ON DELETE`` rules.

        :raises NoResultFound: If there is no such item.
        """
        deleted = self.is_storable_id(id) and self.query_raw.filter(
            self.model.id == id
        ).delete(synchronize_session="fetch")
        if not deleted:
            self.session.rollback()
            raise NoResultFound(f"no {self.model.__name__} with id {id}")

        self.commit()

    def commit(self, data=None):
        """Commit pending changes.

        Integrity errors roll the session back and are passed to
        `resolve_integrity_error` to be converted where possible.
        """
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()

            error = self.resolve_integrity_error(e, data or {})
            if error is e:
                raise

            raise error from e

    def resolve_integrity_error(self, error, data):
        """Convert an integrity error into a catalog error where possible.

        :param error: The original integrity error.
        :param dict data: The data that was being written.
        :return: The error to raise.
        :rtype: :py:class:`Exception`
        """
        return error


class AuthorRepository(ModelRepository):
    model = Author
    eager_relationships = ("books",)


class BookRepository(ModelRepository):
    model = Book
    eager_relationships = ("author",)

    def resolve_integrity_error(self, error, data):
        author_id = data.get("author_id")
        if author_id is None:
            return error

        # The author may have been deleted between the service's existence
        # check and this write.
        if AuthorRepository(self.session).exists(author_id):
            return error

        return ValidationError(f"Author with ID {author_id} does not exist")
