import flask
from werkzeug.exceptions import NotFound

from .utils import format_validation_errors

# -----------------------------------------------------------------------------


class CatalogError(Exception):
    """Base class for errors raised by the catalog services.

    Each subclass carries the HTTP status and the error name used when the
    error reaches the API layer.

    :param str message: A human-readable description of the failure.
    """

    status_code = 400
    error = "Bad Request"

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Malformed input, or input referencing an entity that does not exist."""

    status_code = 400
    error = "Validation Error"

    @classmethod
    def from_schema_error(cls, error):
        """Build a validation error from a :py:class:`marshmallow.ValidationError`.

        Every violated field contributes one ``"<field>: <reason>"`` entry.
        """
        return cls(", ".join(format_validation_errors(error.messages)))


class NotFoundError(CatalogError):
    status_code = 404
    error = "Not Found"


# -----------------------------------------------------------------------------


class ApiError(Exception):
    """An API exception.

    When raised or returned from an error handler, this renders a JSON body
    of the form::

        {"statusCode": 404, "error": "Not Found", "message": "..."}

    :param int status_code: The HTTP status code for the error response.
    :param str error: A short name for the kind of error.
    :param str message: The human-readable error message.
    """

    def __init__(self, status_code, error, message):
        super().__init__(message)
        self.status_code = status_code
        self.body = {
            "statusCode": status_code,
            "error": error,
            "message": message,
        }

    @classmethod
    def from_catalog_error(cls, exc):
        return cls(exc.status_code, exc.error, exc.message)

    @classmethod
    def from_http_exception(cls, exc):
        if isinstance(exc, NotFound) and flask.request.url_rule is None:
            message = "Route {}:{} not found".format(
                flask.request.method, flask.request.path
            )
        else:
            message = exc.description

        return cls(exc.code, exc.name, message)

    @classmethod
    def from_storage_error(cls, exc):
        # Storage details never reach the client.
        return cls(400, "Database Error", "Invalid request to database")

    @classmethod
    def from_unexpected_error(cls, exc):
        if flask.current_app.debug:
            message = str(exc)
        else:
            message = "Something went wrong"

        return cls(500, "Internal Server Error", message)

    @property
    def response(self):
        return flask.jsonify(self.body), self.status_code
