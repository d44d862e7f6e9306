"""REST client for the expense backend"""

import logging
from typing import Any, Callable

import httpx

from api.errors import ApiError, AuthFailure, NetworkFailure, NotFound, ValidationFailure
from utils.settings import settings

logger = logging.getLogger(__name__)

_VALIDATION_STATUSES = {400, 409, 422}


class ApiClient:
    """Thin wrapper over httpx that attaches the bearer token and maps errors.

    Every failure surfaces as an ApiError subclass; a 401 is always an
    AuthFailure so session teardown can be handled in one place.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token_provider: Callable[[], str | None] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self._token_provider = token_provider or (lambda: None)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def close(self):
        self._client.close()

    def get(self, path: str, params: dict | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: dict, auth: bool = True) -> Any:
        return self.request("POST", path, json=json, auth=auth)

    def put(self, path: str, json: dict) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
        auth: bool = True,
    ) -> Any:
        """
        Send a request and return the decoded JSON body (None when empty).

        Raises:
            NetworkFailure: On timeout, transport errors, or an undecodable body
            AuthFailure: On 401
            NotFound: On 404
            ValidationFailure: On 400, 409 and 422
            ApiError: On any other non-2xx status
        """
        headers = {}
        if auth:
            token = self._token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        try:
            response = self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("Backend timeout", extra={"method": method, "path": path})
            raise NetworkFailure(f"Backend timeout after {self.timeout}s") from e
        except httpx.RequestError as e:
            logger.warning("Backend unreachable", extra={"method": method, "path": path, "error": str(e)})
            raise NetworkFailure("Network error") from e

        logger.debug(
            "Backend call",
            extra={"method": method, "path": path, "status": response.status_code},
        )

        if response.is_error:
            raise self._error_for(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise NetworkFailure("Malformed response from backend", response.status_code) from e

    def _error_for(self, response: httpx.Response) -> ApiError:
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None
        message = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("error")
        message = message or f"HTTP error! status: {status}"

        logger.warning(
            "Backend rejected call",
            extra={"method": response.request.method, "path": response.request.url.path, "status": status},
        )

        if status == 401:
            return AuthFailure(message, status)
        if status == 404:
            return NotFound(message, status)
        if status in _VALIDATION_STATUSES:
            return ValidationFailure(message, status)
        return ApiError(message, status)
