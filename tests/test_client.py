from unittest.mock import MagicMock, patch

import pytest
import requests

from easyguide.errors import ApplicationError
from easyguide.rest.client import ServiceClient
from tests.conftest import failed, make_response, ok


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("easyguide.rest.client.time.sleep") as sleep:
        yield sleep


class TestRequest:
    def test_get_sends_json_and_no_cache_headers(self, session):
        session.request.return_value = ok({"id": 1})
        client = ServiceClient("http://data.test/", session=session)

        assert client.get("/users/1") == {"id": 1}

        args, kwargs = session.request.call_args
        assert args == ("GET", "http://data.test/users/1")
        assert kwargs["headers"]["Cache-Control"] == "no-cache"
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_post_has_no_cache_headers(self, session):
        session.request.return_value = ok({"id": 1}, 201)
        ServiceClient("http://data.test", session=session).post("users/create", json={"a": 1}, status=201)

        kwargs = session.request.call_args.kwargs
        assert "Cache-Control" not in kwargs["headers"]
        assert kwargs["json"] == {"a": 1}

    def test_5xx_is_retried_with_fixed_delay(self, session, no_sleep):
        session.request.side_effect = [make_response(502, {}), make_response(500, {}), ok("done")]
        client = ServiceClient("http://data.test", max_retry_attempts=2, delay_retry_attempts=3, session=session)

        assert client.get("/health") == "done"
        assert session.request.call_count == 3
        assert [c.args for c in no_sleep.call_args_list] == [(3,), (3,)]

    def test_4xx_is_not_retried(self, session, no_sleep):
        session.request.return_value = failed(404, 1, "User not found")
        client = ServiceClient("http://data.test", max_retry_attempts=5, session=session)

        response = client.request("GET", "/users/9")

        assert response.status_code == 404
        assert session.request.call_count == 1
        no_sleep.assert_not_called()

    def test_last_5xx_is_returned_after_retries(self, session):
        session.request.return_value = make_response(503, {})
        client = ServiceClient("http://data.test", max_retry_attempts=1, session=session)

        assert client.request("GET", "/x").status_code == 503
        assert session.request.call_count == 2

    def test_exhausted_connection_errors_become_503(self, session):
        session.request.side_effect = requests.ConnectionError("refused")
        client = ServiceClient("http://data.test", max_retry_attempts=2, session=session)

        with pytest.raises(ApplicationError) as exc:
            client.get("/users/1")
        assert exc.value.status_code == 503
        assert "http://data.test/users/1" in exc.value.error_message
        assert session.request.call_count == 3

    def test_timeout_then_success(self, session):
        session.request.side_effect = [requests.Timeout("slow"), ok([1, 2])]
        client = ServiceClient("http://data.test", max_retry_attempts=1, session=session)
        assert client.get("/cities") == [1, 2]

    def test_no_retries_configured_connection_error(self, session, no_sleep):
        session.request.side_effect = requests.ConnectionError("refused")
        client = ServiceClient("http://data.test", session=session)

        with pytest.raises(ApplicationError) as exc:
            client.request("GET", "/users/1")
        assert exc.value.error_message == "Service unavailable: http://data.test/users/1"
        assert session.request.call_count == 1
        no_sleep.assert_not_called()

    def test_other_request_errors_are_not_retried(self, session, no_sleep):
        session.request.side_effect = requests.exceptions.InvalidURL("bad url")
        client = ServiceClient("http://data.test", max_retry_attempts=3, session=session)

        with pytest.raises(requests.exceptions.InvalidURL):
            client.request("GET", "/users/1")
        assert session.request.call_count == 1
        no_sleep.assert_not_called()


class TestExpect:
    def test_downstream_error_is_passed_through(self):
        errors = [{"field": "email", "errorCode": 400, "errorMessage": "bad"}]
        with pytest.raises(ApplicationError) as exc:
            ServiceClient.expect(failed(400, 400, "Invalid parameters", errors))
        assert exc.value.status_code == 400
        assert exc.value.error_message == "Invalid parameters"
        assert exc.value.errors == errors

    def test_unexpected_success_status_is_an_error(self):
        with pytest.raises(ApplicationError) as exc:
            ServiceClient.expect(ok({"id": 1}, 200), 201)
        assert exc.value.status_code == 200

    def test_non_json_body(self):
        response = make_response(502)
        response.reason = "Bad Gateway"
        with pytest.raises(ApplicationError) as exc:
            ServiceClient.expect(response)
        assert exc.value.error_code == 500
        assert exc.value.error_message == "Bad Gateway"
