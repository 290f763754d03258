# easyguide/rest/client.py
import logging
import time
from typing import Optional

import requests
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from easyguide.errors import ERROR_CODES, ApplicationError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def _is_server_error(response: requests.Response) -> bool:
    return response.status_code >= 500


def _log_attempt(retry_state: RetryCallState):
    method, url = retry_state.args[:2]
    outcome = retry_state.outcome
    reason = outcome.exception() if outcome.failed else outcome.result().status_code
    logger.warning("[HTTP] %s %s attempt %d failed: %s", method, url, retry_state.attempt_number, reason)


def _give_up(retry_state: RetryCallState):
    """Return the last 5xx as-is; a connection that never came up is a 503."""
    outcome = retry_state.outcome
    if not outcome.failed:
        return outcome.result()
    method, url = retry_state.args[:2]
    error = outcome.exception()
    logger.error("[HTTP] %s %s failed: %s", method, url, error)
    raise ApplicationError(503, ERROR_CODES["internal_server_error"], f"Service unavailable: {url}") from error


class ServiceClient:
    """
    JSON client for one internal service.

    Connection errors, timeouts and 5xx replies are retried ``max_retry_attempts``
    times with a fixed delay. The last response is returned as-is, even when it
    is not 2xx; use ``expect`` to unwrap ``resultData`` or re-raise the
    downstream error.
    """

    def __init__(self, base_url: str, max_retry_attempts: int = 0, delay_retry_attempts: float = 10,
                 timeout: float = 30, session: Optional[requests.Session] = None):
        self.base_url = (base_url or "").rstrip("/")
        self.max_retry_attempts = max(int(max_retry_attempts or 0), 0)
        self.delay_retry_attempts = delay_retry_attempts
        self.timeout = timeout
        self.session = session or requests.Session()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, json=None, params=None) -> requests.Response:
        method = method.upper()
        url = self.url(path)
        headers = dict(JSON_HEADERS)
        if method == "GET":
            headers.update(NO_CACHE_HEADERS)

        retrying = Retrying(
            stop=stop_after_attempt(self.max_retry_attempts + 1),
            wait=wait_fixed(self.delay_retry_attempts),
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout))
            | retry_if_result(_is_server_error),
            before_sleep=_log_attempt,
            retry_error_callback=_give_up,
            sleep=time.sleep,
        )
        return retrying(
            self.session.request, method, url, json=json, params=params, headers=headers, timeout=self.timeout
        )

    @staticmethod
    def expect(response: requests.Response, status: int = 200):
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        if response.status_code == status:
            return body.get("resultData")
        raise ApplicationError(
            response.status_code,
            body.get("errorCode", ERROR_CODES["internal_server_error"]),
            body.get("errorMessage") or response.reason or "Downstream service error",
            body.get("errors"),
        )

    def call(self, method: str, path: str, status: int = 200, json=None, params=None):
        return self.expect(self.request(method, path, json=json, params=params), status)

    def get(self, path: str, params=None, status: int = 200):
        return self.call("GET", path, status, params=params)

    def post(self, path: str, json=None, status: int = 200, params=None):
        return self.call("POST", path, status, json=json, params=params)

    def put(self, path: str, json=None, status: int = 200):
        return self.call("PUT", path, status, json=json)

    def patch(self, path: str, json=None, status: int = 200, params=None):
        return self.call("PATCH", path, status, json=json, params=params)

    def delete(self, path: str, status: int = 200):
        return self.call("DELETE", path, status)

    def __repr__(self):
        return f"<ServiceClient {self.base_url}>"
