"""
HTTP Client Adapter for the livestock REST backend
Attaches bearer credentials, maps failures to the error taxonomy and
performs at most one transparent token refresh per request
"""
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from livestock_core.errors import (
    ApiError,
    ApiValidationError,
    AuthenticationError,
    LivestockError,
    NetworkError,
    NotFoundError,
    ServerError,
)
from livestock_core.logging import get_logger

logger = get_logger(__name__)

TokenProvider = Callable[[], Optional[str]]
RefreshHandler = Callable[[], bool]


@dataclass
class APIConfig:
    """Configuration for the backend connection"""
    base_url: str
    timeout: float = 30.0
    headers: Optional[Dict[str, str]] = None


class ApiClient:
    """
    Thin wrapper over ``requests.Session`` for the livestock backend.

    Usage:
        client = ApiClient(APIConfig(base_url="https://farm.example.com/api"))
        client.set_token_provider(lambda: tokens["access"])
        animals = client.get("animals/", params={"species": "cattle"})
    """

    # Endpoints that must never trigger the refresh-and-retry cycle
    REFRESH_EXEMPT_PATHS = (
        "auth/token/refresh/",
        "auth/login/",
        "auth/register/",
        "auth/logout/",
    )

    def __init__(
        self,
        config: APIConfig,
        token_provider: Optional[TokenProvider] = None,
        refresh_handler: Optional[RefreshHandler] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if config.headers:
            self.session.headers.update(config.headers)
        self._token_provider = token_provider
        self._refresh_handler = refresh_handler
        self._refresh_lock = threading.Lock()

    def set_token_provider(self, provider: Optional[TokenProvider]) -> None:
        """Set the callable returning the current access token"""
        self._token_provider = provider

    def set_refresh_handler(self, handler: Optional[RefreshHandler]) -> None:
        """Set the callable invoked once on a 401; it returns True when a new token is available"""
        self._refresh_handler = handler

    def close(self) -> None:
        self.session.close()

    def _build_url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _current_token(self) -> Optional[str]:
        return self._token_provider() if self._token_provider else None

    @staticmethod
    def _auth_headers(token: Optional[str]) -> Dict[str, str]:
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _can_refresh(self, path: str) -> bool:
        normalized = path.lstrip("/")
        return (
            self._refresh_handler is not None
            and not any(normalized.startswith(p) for p in self.REFRESH_EXEMPT_PATHS)
        )

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        files: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> requests.Response:
        url = self._build_url(path)
        kwargs: Dict[str, Any] = {
            "params": params,
            "headers": self._auth_headers(token),
            "timeout": self.config.timeout,
        }
        if files:
            # Multipart: form fields travel as data next to the files
            kwargs["data"] = json
            kwargs["files"] = files
        elif json is not None:
            kwargs["json"] = json

        try:
            return self.session.request(method=method, url=url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise NetworkError(
                f"Request failed for {method} {url}: {e}",
                method=method,
                url=url,
            )

    def _refresh(self, rejected_token: Optional[str]) -> bool:
        # One refresh at a time; requests rejected with the same token share it
        with self._refresh_lock:
            current = self._current_token()
            if current and current != rejected_token:
                logger.info("Access token already refreshed, retrying with the new one")
                return True
            try:
                return bool(self._refresh_handler())
            except LivestockError as e:
                logger.warning(f"Token refresh failed: {e}")
                return False

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make an authenticated request and return the decoded body.

        A 401 response triggers the refresh handler once; if it reports a new
        token the request is re-sent exactly once. Concurrent 401s for the
        same token share a single refresh.

        Returns:
            Decoded JSON body, raw text for non-JSON bodies, or None when empty

        Raises:
            NetworkError: No response received
            ApiValidationError: 400/422
            AuthenticationError: 401 after the refresh attempt
            NotFoundError: 404
            ServerError: 5xx
            ApiError: Any other non-success status
        """
        method = method.upper()
        token = self._current_token()
        response = self._send(method, path, params=params, json=json, files=files, token=token)

        if response.status_code == 401 and self._can_refresh(path):
            logger.warning(f"Got 401 for {method} {path}, attempting token refresh...")
            if self._refresh(token):
                response = self._send(
                    method, path, params=params, json=json, files=files, token=self._current_token()
                )

        return self._handle_response(method, response)

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _handle_response(self, method: str, response: requests.Response) -> Any:
        status = response.status_code
        payload = self._decode(response)
        if status < 400:
            return payload

        url = str(response.url)
        message = f"HTTP {status} for {method} {url}"
        kwargs = {"status_code": status, "payload": payload, "method": method, "url": url}

        if status in (400, 422):
            raise ApiValidationError(message, **kwargs)
        if status == 401:
            raise AuthenticationError(message, **kwargs)
        if status == 404:
            raise NotFoundError(message, **kwargs)
        if status >= 500:
            raise ServerError(message, **kwargs)
        raise ApiError(message, **kwargs)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, files: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", path, json=json, files=files)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Any = None, files: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PATCH", path, json=json, files=files)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
