import json
import re
from collections.abc import Mapping, Sequence

from flask.testing import FlaskClient

from .utils import UNDEFINED

# -----------------------------------------------------------------------------


class ApiClient(FlaskClient):
    """A `flask.testing.FlaskClient` with a few conveniences:

    * Prefixes paths with the API prefix
    * Sends ``data`` as a JSON request body
    """

    def open(self, path, *args, **kwargs):
        full_path = "{}{}".format(
            self.application.extensions["bookstore"].api.prefix, path
        )

        if "data" in kwargs:
            kwargs.setdefault("content_type", "application/json")
            if kwargs["content_type"] == "application/json":
                kwargs["data"] = json.dumps(kwargs["data"])

        return super().open(full_path, *args, **kwargs)


# -----------------------------------------------------------------------------


class Predicate:
    """A helper object to do predicate assertion"""

    def __init__(self, predicate):
        self.predicate = predicate

    def __eq__(self, other):
        return self.predicate(other)

    def __ne__(self, other):
        return not self.predicate(other)


def InstanceOf(type):
    return Predicate(lambda value: isinstance(value, type))


def Matching(expected_regex):
    return Predicate(re.compile(expected_regex).search)


def _describe_parent(key):
    if key is None:
        return ""

    kind = "index" if isinstance(key, int) else "key"
    return f" for parent {kind} {key!r}"


def assert_shape(actual, expected, key=None):
    """Assert that ``actual`` and ``expected`` have the same data shape.

    Mappings in ``actual`` may carry keys that ``expected`` doesn't mention;
    a key mapped to ``UNDEFINED`` in ``expected`` must be absent. Sequences
    must match item by item.
    """
    where = _describe_parent(key)

    if isinstance(expected, Mapping):
        assert isinstance(actual, Mapping), f"{actual!r} is not a Mapping{where}"

        for child_key, child_expected in expected.items():
            if child_expected is UNDEFINED:
                assert (
                    child_key not in actual
                ), f"unexpected key {child_key!r} in {actual!r}{where}"
                continue

            assert (
                child_key in actual
            ), f"missing key {child_key!r} in {actual!r}{where}"
            assert_shape(actual[child_key], child_expected, key=child_key)
        return

    if isinstance(expected, Sequence) and not isinstance(
        expected, (str, bytes)
    ):
        assert isinstance(
            actual, Sequence
        ), f"{actual!r} is not a Sequence{where}"
        assert len(actual) == len(expected), (
            f"expected {len(expected)} items, got {len(actual)}{where}"
        )

        for index, (actual_item, expected_item) in enumerate(
            zip(actual, expected)
        ):
            assert_shape(actual_item, expected_item, key=index)
        return

    assert expected == actual, f"{actual!r} is not equal to {expected!r}{where}"


def Shape(expected):
    def predicate(actual):
        assert_shape(actual, expected)
        return True

    return Predicate(predicate)


# -----------------------------------------------------------------------------


def get_body(response):
    assert response.mimetype == "application/json"
    return json.loads(response.get_data(as_text=True))


def get_error(response):
    """Get the error body, checking it has the standard keys."""
    body = get_body(response)
    assert body.keys() == {"statusCode", "error", "message"}
    assert body["statusCode"] == response.status_code
    return body


def assert_response(response, expected_status_code, expected_data=UNDEFINED):
    """Assert on the status and contents of a response.

    If specified, expected_data is checked against the body for successful
    responses, or against the error body for error responses. This check
    ignores extra dictionary items in the response contents.
    """

    if not response.content_length:
        response_data = UNDEFINED
    elif response.status_code >= 400:
        response_data = get_error(response)
    else:
        response_data = get_body(response)

    status_code = response.status_code

    assert (
        status_code == expected_status_code
    ), f"expected status code {expected_status_code!r}, got {status_code!r}"

    if expected_data is not UNDEFINED:
        if not isinstance(expected_data, Predicate):
            expected_data = Shape(expected_data)

        assert response_data == expected_data

    return response_data
