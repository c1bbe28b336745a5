import datetime as dt
import flask
import functools
import posixpath
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .exceptions import ApiError, CatalogError

# -----------------------------------------------------------------------------

# Non-numeric and negative IDs don't match the route, so they get a 404.
DEFAULT_ID_RULE = "<int:id>"

# -----------------------------------------------------------------------------


def handle_catalog_error(error):
    return ApiError.from_catalog_error(error).response


def handle_http_exception(error):
    return ApiError.from_http_exception(error).response


def handle_storage_error(error):
    flask.current_app.logger.warning("handled storage error", exc_info=error)
    return ApiError.from_storage_error(error).response


def handle_unexpected_error(error):
    flask.current_app.logger.error("unhandled error", exc_info=error)
    return ApiError.from_unexpected_error(error).response


# -----------------------------------------------------------------------------


class Api:
    """The Api object wires the catalog's REST resources into Flask.

    This can either be bound to an individual Flask application passed in
    at initialization, or to multiple applications via :py:meth:`init_app`.

    After initializing an application, use this object to register resources
    with :py:meth:`add_resource`. Use :py:meth:`add_health` to add a health
    check endpoint.

    Once registered, every error raised while handling a request is rendered
    as a JSON error body; see :py:class:`ApiError`.

    :param app: The Flask application object.
    :type app: :py:class:`flask.Flask`
    :param str prefix: The API path prefix.
    """

    def __init__(self, app=None, prefix=""):
        self.prefix = prefix

        if app:
            self._app = app
            self.init_app(app)
        else:
            self._app = None

    def init_app(self, app):
        """Initialize an application for use with the catalog API.

        :param app: The Flask application object.
        :type app: :py:class:`flask.Flask`
        """
        app.extensions["bookstore"] = BookstoreState(self)

        app.register_error_handler(CatalogError, handle_catalog_error)
        app.register_error_handler(HTTPException, handle_http_exception)
        app.register_error_handler(SQLAlchemyError, handle_storage_error)
        app.register_error_handler(Exception, handle_unexpected_error)

    def _get_app(self, app):
        app = app or self._app
        assert app, "no application specified"
        return app

    def add_resource(
        self, base_rule, base_view, alternate_view=None, *, app=None
    ):
        """Add a REST resource.

        :param str base_rule: The URL rule for the resource. This will be
            prefixed by the API prefix.
        :param ApiView base_view: Class-based view for the resource.
        :param ApiView alternate_view: If specified, the detail view for the
            resource, routed at `base_rule` followed by an integer ID.
        :param app: If specified, the application to which to add
            the route(s). Otherwise, this will be the bound application, if
            present.
        :type app: :py:class:`flask.Flask`
        :raises AssertionError: If no Flask application is bound or specified.
        """
        app = self._get_app(app)
        endpoint = self._get_endpoint(base_view, alternate_view)

        base_rule_full = f"{self.prefix}{base_rule}"
        base_view_func = base_view.as_view(endpoint)

        if not alternate_view:
            app.add_url_rule(base_rule_full, view_func=base_view_func)
            return

        alternate_rule = posixpath.join(base_rule, DEFAULT_ID_RULE)
        alternate_rule_full = f"{self.prefix}{alternate_rule}"
        alternate_view_func = alternate_view.as_view(endpoint)

        @functools.wraps(base_view_func)
        def view_func(*args, **kwargs):
            if flask.request.url_rule.rule == base_rule_full:
                return base_view_func(*args, **kwargs)
            else:
                return alternate_view_func(*args, **kwargs)

        app.add_url_rule(
            base_rule_full,
            view_func=view_func,
            endpoint=endpoint,
            methods=base_view.methods,
        )
        app.add_url_rule(
            alternate_rule_full,
            view_func=view_func,
            endpoint=endpoint,
            methods=alternate_view.methods,
        )

    def _get_endpoint(self, base_view, alternate_view):
        base_view_name = base_view.__name__
        if not alternate_view:
            return base_view_name

        alternate_view_name = alternate_view.__name__
        if len(alternate_view_name) < len(base_view_name):
            return alternate_view_name
        else:
            return base_view_name

    def add_health(self, rule, *, app=None):
        """Add a health check route.

        :param str rule: The URL rule. This will not use the API prefix, as the
            health endpoint is not really part of the API.
        :param app: If specified, the application to which to add the route.
            Otherwise, this will be the bound application, if present.
        :type app: :py:class:`flask.Flask`
        :raises AssertionError: If no Flask application is bound or specified.
        """
        app = self._get_app(app)

        @app.route(rule)
        def health():
            timestamp = dt.datetime.now(dt.timezone.utc)
            return flask.jsonify(status="ok", timestamp=timestamp.isoformat())


# -----------------------------------------------------------------------------


class BookstoreState:
    def __init__(self, api):
        self.api = api
