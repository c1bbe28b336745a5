"""Client for the catalog HTTP API.

:py:class:`CatalogClient` mirrors the API routes one-to-one and returns the
decoded JSON bodies. Error responses raise :py:class:`CatalogClientError`
with the fields of the API's error body.
"""
import httpx

# -----------------------------------------------------------------------------

DEFAULT_URL = "http://localhost:5000"
DEFAULT_PREFIX = "/api"

# -----------------------------------------------------------------------------


class CatalogClientError(Exception):
    """An error response from the catalog API.

    :param int status_code: The HTTP status code.
    :param str error: The error name from the response body.
    :param str message: The error message from the response body.
    """

    def __init__(self, status_code, error, message):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message

    @classmethod
    def from_response(cls, response):
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            return cls(
                response.status_code,
                response.reason_phrase,
                response.text or response.reason_phrase,
            )

        return cls(
            body.get("statusCode", response.status_code),
            body.get("error", response.reason_phrase),
            body.get("message", ""),
        )


class CatalogClient:
    """Typed wrappers around the catalog API.

    :param str base_url: The root URL of the server.
    :param str prefix: The API path prefix.
    :param transport: An optional :py:class:`httpx.BaseTransport`, e.g. an
        :py:class:`httpx.WSGITransport` to call an application in-process.
    """

    def __init__(
        self, base_url=DEFAULT_URL, *, prefix=DEFAULT_PREFIX, transport=None
    ):
        self.prefix = prefix
        self._client = httpx.Client(base_url=base_url, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._client.close()

    def request(self, method, path, **kwargs):
        response = self._client.request(method, path, **kwargs)
        if response.is_error:
            raise CatalogClientError.from_response(response)

        if response.status_code == 204:
            return None

        return response.json()

    def _api_path(self, *parts):
        return "/".join((self.prefix,) + tuple(str(part) for part in parts))

    def health(self):
        return self.request("GET", "/health")

    # Authors -----------------------------------------------------------------

    def list_authors(self):
        return self.request("GET", self._api_path("authors"))

    def get_author(self, id):
        return self.request("GET", self._api_path("authors", id))

    def create_author(self, data):
        return self.request("POST", self._api_path("authors"), json=data)

    def update_author(self, id, data):
        return self.request("PUT", self._api_path("authors", id), json=data)

    def delete_author(self, id):
        self.request("DELETE", self._api_path("authors", id))

    # Books -------------------------------------------------------------------

    def list_books(self):
        return self.request("GET", self._api_path("books"))

    def get_book(self, id):
        return self.request("GET", self._api_path("books", id))

    def create_book(self, data):
        return self.request("POST", self._api_path("books"), json=data)

    def update_book(self, id, data):
        return self.request("PUT", self._api_path("books", id), json=data)

    def delete_book(self, id):
        self.request("DELETE", self._api_path("books", id))
