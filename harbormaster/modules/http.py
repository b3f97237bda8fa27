"""
Authenticated REST client shared by the provider modules.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from harbormaster.config import Config
from harbormaster.errors import (
    AuthError,
    DecodeError,
    NotFoundError,
    TransportError,
    UnexpectedStatusError,
)
from harbormaster.utils import redact_sensitive_data

logger = logging.getLogger(__name__)


@dataclass
class ProviderResponse:
    """Raw answer from a provider."""
    status_code: int
    body: bytes
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Dict[str, Any]:
        """Decode the body, raising DecodeError if it is not a JSON object."""
        if not self.body:
            return {}
        try:
            data = json.loads(self.body)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {self.url}: {e}") from e
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object from {self.url}")
        return data


class ProviderClient:
    """Client for one provider's REST endpoint.

    Every call opens its own request; nothing is kept between calls besides
    the base URL and the auth headers.
    """

    def __init__(self, base_url: str, headers: Dict[str, str], timeout: Optional[float] = None,
                 logger: Optional[logging.Logger] = None):
        self.base_url = base_url.rstrip('/') + '/'
        self.headers = {"Content-Type": "application/json", **headers}
        self.timeout = timeout if timeout is not None else Config.API_TIMEOUT
        self.logger = logger or logging.getLogger(f"{__name__}.ProviderClient")

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                payload: Optional[Dict[str, Any]] = None,
                expected_status: Optional[int] = None) -> ProviderResponse:
        """
        Issue one request and classify the answer.

        Args:
            method: HTTP verb
            path: Path relative to the base URL
            params: Query string parameters
            payload: JSON body
            expected_status: Exact status required instead of any 2xx

        Returns:
            ProviderResponse for a successful request

        Raises:
            TransportError: If the request could not be completed
            AuthError: If the provider rejected the credentials
            NotFoundError: If the provider answered 404
            UnexpectedStatusError: For any other unsuccessful status
        """
        url = self.base_url + path.lstrip('/')
        self.logger.debug(f"{method} {url} params={params} body={payload}")
        try:
            resp = requests.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        result = ProviderResponse(status_code=resp.status_code, body=resp.content or b'', url=url)
        self.logger.debug(f"response Status: {resp.status_code}")
        self.logger.debug(f"response Headers: {redact_sensitive_data(dict(resp.headers))}")
        self.logger.debug(f"response Body: {result.body.decode('utf-8', errors='replace')}")

        if resp.status_code in (401, 403):
            raise AuthError(f"Provider rejected credentials: status code: {resp.status_code} - url: {url}")
        if resp.status_code == 404:
            raise NotFoundError(f"Not found: {url}")
        if expected_status is not None and resp.status_code != expected_status:
            raise UnexpectedStatusError(
                f"{method} request failed: status code: {resp.status_code} - url: {url}",
                status_code=resp.status_code,
                url=url,
            )
        if not result.ok:
            raise UnexpectedStatusError(
                f"Response code: {resp.status_code} - url: {url}",
                status_code=resp.status_code,
                url=url,
            )
        return result

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.request("GET", path, params=params).json()

    def post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("POST", path, payload=payload).json()

    def put(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("PUT", path, payload=payload).json()

    def delete(self, path: str, expected_status: Optional[int] = None) -> None:
        """Delete a resource; there is no body to return."""
        self.request("DELETE", path, expected_status=expected_status)
