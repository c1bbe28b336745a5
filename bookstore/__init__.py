# flake8: noqa

from .api import Api
from .app import create_app
from .client import CatalogClient, CatalogClientError
from .exceptions import ApiError, CatalogError, NotFoundError, ValidationError
from .models import Author, Book, db
from .repository import AuthorRepository, BookRepository, ModelRepository
from .services import AuthorService, BookService, CatalogService
from .view import ApiView, GenericServiceView, ServiceView
