"""Request and response plumbing shared by the Greenhouse clients."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Collection, Dict, Mapping, Optional, Tuple

import requests

from .config import GreenhouseConfig, resolve_api_token

LOGGER = logging.getLogger(__name__)

PAGINATION_OPTIONS = frozenset({"page", "per_page"})


class GreenhouseError(RuntimeError):
    """Base class for exceptions raised by the Greenhouse clients."""


class GreenhouseAPIError(GreenhouseError):
    """The Greenhouse API answered with a non-2xx status code.

    ``body`` holds the decoded JSON error payload when the response carried one,
    the raw text when it did not parse, and ``None`` for an empty body.
    """

    def __init__(self, status_code: int, body: Any, url: str):
        detail = f" body={body!r}" if body else ""
        super().__init__(f"API request to {url!r} failed with status={status_code}.{detail}")
        self.status_code = status_code
        self.body = body
        self.url = url

    @property
    def errors(self) -> list:
        if isinstance(self.body, Mapping) and isinstance(self.body.get("errors"), list):
            return self.body["errors"]
        return []

    @property
    def message(self) -> str | None:
        if isinstance(self.body, Mapping):
            message = self.body.get("message")
            return str(message) if message is not None else None
        if isinstance(self.body, str):
            return self.body or None
        return None


class GreenhouseDecodeError(GreenhouseError):
    """A successful response carried a body that is not valid JSON."""

    def __init__(self, url: str):
        super().__init__(f"Invalid JSON response returned by {url!r}")
        self.url = url


class Record(dict):
    """A decoded JSON object whose keys can also be read as attributes.

    Attribute lookup only falls back to the keys, so a key named after a
    ``dict`` method (``values``, ``keys``, ``items``, ``get``, ``copy``,
    ``pop``, ``update``, ...) still resolves to the method. Read such keys
    with item access: ``record["values"]``.
    """

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __dir__(self):
        return list(super().__dir__()) + [key for key in self if isinstance(key, str)]


def path_id(resource_id: Any = None) -> str:
    """Return ``/<id>`` for a resource id, or an empty string without one."""
    if resource_id is None:
        return ""
    return f"/{resource_id}"


def permitted_options(
    options: Optional[Mapping[str, Any]], permitted: Collection[str]
) -> Dict[str, Any]:
    """Keep only the whitelisted query options; everything else is dropped quietly."""
    if not options:
        return {}
    return {
        key: value
        for key, value in options.items()
        if key in permitted and value is not None
    }


def load_json(raw: bytes | str, *, symbolize_keys: bool = True) -> Any:
    return json.loads(raw, object_hook=Record if symbolize_keys else None)


class ApiClient(ABC):
    """Build URL, send one request, decode the reply or wrap the failure."""

    def __init__(self, api_token: str | None = None, *, config: GreenhouseConfig | None = None):
        self.config = config if config is not None else GreenhouseConfig()
        self.api_token = resolve_api_token(api_token, self.config)

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Root URL every request path is joined onto."""

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _basic_auth(self) -> Tuple[str, str]:
        return (self.api_token or "", "")

    def _build_url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        json_body: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        auth: Optional[Tuple[str, str]] = None,
    ) -> Any:
        url = self._build_url(path)
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        LOGGER.debug("%s %s params=%s", method, url, params)
        response = requests.request(
            method,
            url,
            params=params or None,
            data=data,
            json=json_body,
            headers=request_headers,
            auth=auth,
            timeout=self.config.timeout,
        )
        self._record_response(response)
        return self._handle_response(response, url)

    def _record_response(self, response: requests.Response) -> None:
        """Hook for clients that keep per-response state."""

    def _handle_response(self, response: requests.Response, url: str) -> Any:
        if 200 <= response.status_code < 300:
            return self._decode(response, url)

        error = GreenhouseAPIError(response.status_code, self._error_body(response), url)
        LOGGER.warning("Greenhouse API returned %s for %s", response.status_code, url)
        if self.config.raise_errors:
            raise error
        return error

    def _decode(self, response: requests.Response, url: str) -> Any:
        raw = response.content
        if not raw or not raw.strip():
            return Record() if self.config.symbolize_keys else {}
        try:
            return load_json(raw, symbolize_keys=self.config.symbolize_keys)
        except ValueError as exc:
            LOGGER.debug("Invalid JSON payload from %s: %s", url, raw)
            error = GreenhouseDecodeError(url)
            if self.config.raise_errors:
                raise error from exc
            return error

    def _error_body(self, response: requests.Response) -> Any:
        raw = response.content
        if not raw or not raw.strip():
            return None
        try:
            return load_json(raw, symbolize_keys=self.config.symbolize_keys)
        except ValueError:
            return response.text
