"""Connection boundary and the default HTTP transport."""

import json
from typing import Any, Dict, Optional, Protocol

import requests
from aws_lambda_powertools.logging import Logger
from pydantic import BaseModel, Field

from ..config.app import ClientConfig
from ..exceptions import DeserializationError, TransportError

logger = Logger()

USER_AGENT = "sign-client-python"


class APIResponse(BaseModel):
    """Status code, headers and raw body of one HTTP exchange."""

    status_code: int = Field(..., description="HTTP status code")
    body: bytes = Field(default=b"", description="Raw response body")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers")

    def json_body(self) -> Dict[str, Any]:
        """Decode the body as a JSON object.

        Raises:
            DeserializationError: If the body is not a JSON object
        """
        text = self.body.decode("utf-8", errors="replace")
        try:
            document = json.loads(text)
        except ValueError as e:
            raise DeserializationError("<body>", text[:200], e) from e
        if not isinstance(document, dict):
            raise DeserializationError(
                "<body>", text[:200], TypeError("expected a JSON object")
            )
        return document


class Connection(Protocol):
    """What the resource framework needs from a transport.

    A connection may also carry a ``page_limit`` attribute, used as the
    default page size for collection listings.
    """

    base_url: str

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> APIResponse:
        """Perform one HTTP exchange.

        Raises:
            TransportError: If the exchange fails or the server answers 4xx/5xx
        """
        ...


def send_request(
    connection: Connection,
    method: str,
    url: str,
    document: Optional[Dict[str, Any]] = None,
) -> APIResponse:
    """Send a request with an optional JSON body."""
    headers = None
    body = None
    if document is not None:
        headers = {"Content-Type": "application/json"}
        body = json.dumps(document).encode("utf-8")
    logger.debug("Sending request", extra={"method": method, "url": url})
    return connection.send(method, url, headers=headers, body=body)


def send_json_request(
    connection: Connection,
    method: str,
    url: str,
    document: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Send a request and decode the JSON object in the response."""
    return send_request(connection, method, url, document).json_body()


class RequestsConnection:
    """Connection backed by a ``requests`` session.

    Authenticates with a static bearer token. Never retries: a failed exchange
    is raised as TransportError.
    """

    def __init__(self, config: ClientConfig) -> None:
        """Initialize the session.

        Args:
            config: Client configuration
        """
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.page_limit = config.page_limit
        self.session = requests.Session()
        self.session.headers.update(
            {"User-Agent": USER_AGENT, "Accept": "application/json"}
        )
        if config.access_token:
            self.session.headers["Authorization"] = f"Bearer {config.access_token}"

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> APIResponse:
        """Perform one HTTP exchange.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra request headers
            body: Raw request body

        Returns:
            The response

        Raises:
            TransportError: If the request fails or the status code is 4xx/5xx
        """
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                data=body,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(
                "HTTP exchange failed",
                extra={"method": method, "url": url, "error": str(e)},
            )
            raise TransportError(
                f"{method} {url} failed",
                details={"error": str(e)},
            ) from e

        if response.status_code >= 400:
            logger.error(
                "API returned an error status",
                extra={"method": method, "url": url, "status_code": response.status_code},
            )
            raise TransportError(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        return APIResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self.session.close()
