import datetime as dt

from bookstore.testing import assert_response

# -----------------------------------------------------------------------------


def test_health(base_client):
    response = base_client.get("/health")
    data = assert_response(response, 200, {"status": "ok"})

    timestamp = dt.datetime.fromisoformat(data["timestamp"])
    assert timestamp.tzinfo is not None


def test_health_not_under_api_prefix(client):
    response = client.get("/health")
    assert_response(response, 404)
