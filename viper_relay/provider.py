"""HTTP transport that submits relays to Viper servicer nodes."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from . import config
from .models import RelayErrorResponse, RelayInput, RelayOutput, RelayRequestOptions
from .utils.serialization import canonical_json

logger = logging.getLogger("viper.provider")


class ProviderError(Exception):
    """Base class for failures reported by the HTTP provider."""


class ServerError(ProviderError):
    """The node answered with a 5xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__("error: >= 500 status code on connection")
        self.status_code = status_code


class UnexpectedStatusError(ProviderError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"error: unexpected status code {status_code} on connection")
        self.status_code = status_code


class NonJSONResponseError(ProviderError):
    def __init__(self, body: str) -> None:
        super().__init__("non JSON response")
        self.body = body


class MalformedResponseError(ProviderError):
    """The body is JSON but does not have the shape of a relay response."""

    def __init__(self, body: str) -> None:
        super().__init__("malformed relay response")
        self.body = body


class RelayError(ProviderError):
    """Structured error a servicer returns when it rejects a relay."""

    def __init__(self, code: int, codespace: str, message: str, servicer_pub_key: str) -> None:
        super().__init__(f"Request failed with code: {code}, codespace: {codespace} and message: {message}")
        self.code = code
        self.codespace = codespace
        self.message = message
        self.servicer_pub_key = servicer_pub_key


class HTTPProvider:
    """Blocking relay transport backed by an :class:`httpx.Client`.

    ``client`` may be injected (tests pass a FastAPI ``TestClient``); when
    omitted a client is created from :mod:`viper_relay.config`.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: float = config.REQUEST_TIMEOUT_S,
    ) -> None:
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout, verify=config.VERIFY_TLS)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HTTPProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post(self, url: str, body: bytes, options: Optional[RelayRequestOptions]) -> httpx.Response:
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent": config.USER_AGENT,
        }
        timeout = self.timeout
        if options is not None:
            headers.update(options.headers)
            if options.timeout is not None:
                timeout = options.timeout
        return self._client.post(url, content=body, headers=headers, timeout=timeout)

    def relay(
        self,
        rpc_url: str,
        relay_input: RelayInput,
        options: Optional[RelayRequestOptions] = None,
    ) -> RelayOutput:
        """POST *relay_input* to the node at *rpc_url* and return its output."""

        url = rpc_url.rstrip("/") + config.CLIENT_RELAY_ROUTE
        response = self._post(url, canonical_json(relay_input.to_json()), options)

        if response.status_code >= 500:
            raise ServerError(response.status_code)

        if response.status_code != 200:
            raise _parse_relay_error(response, relay_input.proof.servicer_pub_key)

        try:
            body = response.json()
        except ValueError as exc:
            raise NonJSONResponseError(response.text) from exc
        try:
            return RelayOutput.model_validate(body)
        except ValidationError as exc:
            raise MalformedResponseError(response.text) from exc


def _parse_relay_error(response: httpx.Response, servicer_pub_key: str) -> ProviderError:
    try:
        parsed = RelayErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        logger.debug("relay rejected with status %s and unparseable body", response.status_code)
        return UnexpectedStatusError(response.status_code)

    return RelayError(
        code=parsed.error.code,
        codespace=parsed.error.codespace,
        message=parsed.error.message,
        servicer_pub_key=servicer_pub_key,
    )


__all__ = [
    "HTTPProvider",
    "MalformedResponseError",
    "NonJSONResponseError",
    "ProviderError",
    "RelayError",
    "ServerError",
    "UnexpectedStatusError",
]
