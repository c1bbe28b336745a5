import flask

from .exceptions import NotFoundError, ValidationError
from .repository import AuthorRepository, BookRepository

# -----------------------------------------------------------------------------


class CatalogService:
    """Domain operations for one kind of catalog entity.

    Services own their repositories, check that the entities they touch
    exist, and raise :py:class:`NotFoundError` or :py:class:`ValidationError`
    rather than letting storage failures surface.

    :param session: The SQLAlchemy session for the current unit of work.
    """

    #: The :py:class:`ModelRepository` subclass for the entity.
    repository_class = None
    #: The entity name used in error and log messages.
    label = None

    def __init__(self, session):
        self.session = session
        self.repository = self.repository_class(session)

    def list(self):
        return self.repository.list()

    def get(self, id):
        """Get an entity by ID.

        :raises NotFoundError: If there is no such entity.
        """
        item = self.repository.get(id)
        if item is None:
            raise self.not_found(id)

        return item

    def create(self, data):
        """Create an entity from validated data.

        :raises ValidationError: If the data references missing entities.
        """
        self.validate_references(data)

        item = self.repository.create(data)
        self.log("created %s %s", self.label, item.id)
        return item

    def update(self, id, data):
        """Apply a partial update.

        :raises NotFoundError: If there is no such entity.
        :raises ValidationError: If the data references missing entities.
        """
        self.ensure_exists(id)
        self.validate_references(data)

        item = self.repository.update(id, data)
        self.log("updated %s %s (%s)", self.label, id, ", ".join(data))
        return item

    def delete(self, id):
        """Delete an entity.

        :raises NotFoundError: If there is no such entity.
        """
        self.ensure_exists(id)

        self.repository.delete(id)
        self.log("deleted %s %s", self.label, id)

    def ensure_exists(self, id):
        if not self.repository.exists(id):
            raise self.not_found(id)

    def validate_references(self, data):
        """Hook for checking that entities referenced by `data` exist."""
        pass

    def not_found(self, id):
        return NotFoundError(f"{self.label} with ID {id} not found")

    def log(self, message, *args):
        # Services also run on a bare session, e.g. from scripts.
        if not flask.has_app_context():
            return

        flask.current_app.logger.info(message, *args)


class AuthorService(CatalogService):
    repository_class = AuthorRepository
    label = "Author"


class BookService(CatalogService):
    repository_class = BookRepository
    label = "Book"

    def __init__(self, session):
        super().__init__(session)
        self.authors = AuthorRepository(session)

    def validate_references(self, data):
        # Partial updates may leave the author unchanged.
        if "author_id" not in data:
            return

        author_id = data["author_id"]
        # An unknown author is bad input for the book, not a missing book.
        if not self.authors.exists(author_id):
            raise ValidationError(
                f"Author with ID {author_id} does not exist"
            )
