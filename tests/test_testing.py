import flask
import pytest

from bookstore.testing import (
    UNDEFINED,
    InstanceOf,
    Matching,
    Predicate,
    Shape,
    assert_response,
    assert_shape,
)

# -----------------------------------------------------------------------------

BOOK = {
    "id": 1,
    "title": "Wolf Totem",
    "publishedYear": 2004,
    "author": {"id": 1, "name": "Jiang Rong", "bio": "Chinese writer"},
    "createdAt": "2024-05-01T12:00:00+00:00",
}

# -----------------------------------------------------------------------------


def test_shape_basic():
    assert_shape(1, 1)
    assert_shape("a", "a")
    assert_shape([1, 2], [1, 2])

    with pytest.raises(AssertionError):
        assert_shape(1, "1")

    with pytest.raises(AssertionError):
        assert_shape([1, 2], [2, 1])

    with pytest.raises(AssertionError):
        assert_shape([1], [1, 2])


def test_shape_mapping():
    assert_shape(BOOK, {})
    assert_shape(BOOK, {"title": "Wolf Totem", "author": {"id": 1}})
    assert_shape(BOOK, {"description": UNDEFINED})
    assert_shape(BOOK, {"publishedYear": InstanceOf(int)})
    assert_shape(BOOK, {"createdAt": Matching(r"^2024-05-01T")})

    with pytest.raises(AssertionError):
        assert_shape(BOOK, [])

    with pytest.raises(AssertionError):
        assert_shape(BOOK, {"author": {"name": "Alex Haley"}})

    with pytest.raises(AssertionError):
        assert_shape(BOOK, {"title": UNDEFINED})

    with pytest.raises(AssertionError) as excinfo:
        assert_shape(BOOK, {"author": {"books": []}})

    assert "for parent key 'author'" in str(excinfo.value)


def test_shape_predicate():
    assert BOOK == Shape({"id": 1})
    assert BOOK != Predicate(lambda value: "description" in value)


def test_assert_response_returns_body(app):
    with app.test_request_context():
        response = flask.jsonify(BOOK)

    assert assert_response(response, 200, {"id": 1}) == BOOK


def test_assert_response_no_content(app):
    with app.test_request_context():
        response = flask.make_response("", 204)

    assert assert_response(response, 204) is UNDEFINED


def test_assert_response_checks_error_body(app):
    error = {"statusCode": 404, "error": "Not Found", "message": "Gone"}

    with app.test_request_context():
        response = flask.make_response(flask.jsonify(error), 404)

    assert assert_response(response, 404, {"message": "Gone"}) == error


def test_assert_response_rejects_malformed_error_body(app):
    with app.test_request_context():
        response = flask.make_response(flask.jsonify(errors=[]), 400)

    with pytest.raises(AssertionError):
        assert_response(response, 400)


def test_assert_response_status_mismatch(app):
    with app.test_request_context():
        response = flask.jsonify(BOOK)

    with pytest.raises(AssertionError) as excinfo:
        assert_response(response, 201)

    assert "expected status code 201, got 200" in str(excinfo.value)
