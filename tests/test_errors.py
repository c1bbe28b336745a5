import logging
import pytest
from sqlalchemy.exc import OperationalError

from bookstore import services
from bookstore.testing import assert_response, get_error

# -----------------------------------------------------------------------------


@pytest.fixture
def raise_from_list(monkeypatch):
    def install(error):
        def list_authors(self):
            raise error

        monkeypatch.setattr(services.AuthorService, "list", list_authors)

    return install


# -----------------------------------------------------------------------------


def test_unknown_route(client):
    response = client.get("/publishers")
    assert_response(
        response,
        404,
        {
            "statusCode": 404,
            "error": "Not Found",
            "message": "Route GET:/api/publishers not found",
        },
    )


@pytest.mark.parametrize("path", ("/authors/abc", "/books/abc", "/books/-1"))
def test_non_numeric_id(client, path):
    response = client.get(path)
    assert_response(
        response, 404, {"message": f"Route GET:/api{path} not found"}
    )


def test_method_not_allowed(client):
    response = client.delete("/authors")
    assert_response(
        response, 405, {"statusCode": 405, "error": "Method Not Allowed"}
    )


def test_invalid_body(client):
    response = client.post("/authors", content_type="text/plain", data="foo")
    assert_response(
        response,
        400,
        {
            "error": "Validation Error",
            "message": "Request body must be a JSON object",
        },
    )


def test_body_not_object(base_client):
    response = base_client.post("/api/authors", json=["Jiang Rong"])
    assert_response(
        response, 400, {"message": "Request body must be a JSON object"}
    )


def test_storage_error(client, raise_from_list, caplog):
    raise_from_list(OperationalError("SELECT 1", {}, Exception("db down")))

    with caplog.at_level(logging.WARNING):
        response = client.get("/authors")

    assert_response(
        response,
        400,
        {
            "statusCode": 400,
            "error": "Database Error",
            "message": "Invalid request to database",
        },
    )
    assert "db down" not in response.get_data(as_text=True)
    assert "handled storage error" in caplog.text


def test_uncaught_production(app, client, raise_from_list, caplog):
    app.debug = False
    raise_from_list(RuntimeError("secret detail"))

    with caplog.at_level(logging.ERROR):
        response = client.get("/authors")

    assert_response(
        response,
        500,
        {
            "statusCode": 500,
            "error": "Internal Server Error",
            "message": "Something went wrong",
        },
    )
    assert "unhandled error" in caplog.text


def test_uncaught_debug(app, client, raise_from_list):
    app.debug = True
    raise_from_list(RuntimeError("secret detail"))

    response = client.get("/authors")
    assert_response(response, 500, {"message": "secret detail"})


def test_error_envelope_keys(client):
    response = client.get("/authors/999")
    assert set(get_error(response)) == {"statusCode", "error", "message"}


@pytest.mark.parametrize("method", ("get", "put", "patch", "delete"))
def test_out_of_range_id(client, method):
    kwargs = {}
    if method in ("put", "patch"):
        kwargs["data"] = {"title": "Too big"}

    response = getattr(client, method)("/books/99999999999999999999", **kwargs)
    assert_response(
        response,
        404,
        {
            "error": "Not Found",
            "message": "Book with ID 99999999999999999999 not found",
        },
    )
