"""
Module: transport/executor.py
Description: Single HTTP round trip to the queued server.

Sends one request with the configured credentials and TLS options,
buffers the whole response and turns it into either a decoded body or
a typed error. Retrying is left to the retry controller.
"""

import ssl
from typing import Any, Dict, Optional

import httpx

from queued_client.codec import decode
from queued_client.config.settings import QueuedSettings, TlsSettings
from queued_client.errors import (
    QueuedApiError,
    QueuedCodecError,
    QueuedInvalidUrlError,
    QueuedUnauthorizedError,
)
from queued_client.utils.logger import get_logger

logger = get_logger(__name__)

MSGPACK_CONTENT_TYPE = "application/msgpack"
MSGPACK_MEDIA_TYPES = frozenset({"application/msgpack", "application/x-msgpack"})


def build_ssl_context(tls: TlsSettings) -> ssl.SSLContext:
    """
    Build the SSL context used for https requests.

    Args:
        tls: TLS options from the client settings

    Returns:
        Context trusting `tls.ca` (or the system store), presenting the
        client certificate if one is configured

    Raises:
        FileNotFoundError: If a configured CA, cert or key file is missing
        ssl.SSLError: If a configured file is not valid PEM
    """
    context = ssl.create_default_context(cafile=tls.ca)
    if tls.cert:
        context.load_cert_chain(certfile=tls.cert, keyfile=tls.key)
    if not tls.verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def is_msgpack_content_type(content_type: Optional[str]) -> bool:
    """
    Whether a Content-Type header names a msgpack body.

    Args:
        content_type: Raw header value, possibly with parameters

    Returns:
        True for application/msgpack or application/x-msgpack
    """
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in MSGPACK_MEDIA_TYPES


class TransportExecutor:
    """
    Performs exactly one request/response round trip per call.

    The SSL context is built on the first https request and reused; an
    httpx.AsyncClient is opened per request so no connection state is
    shared between calls.
    """

    def __init__(self, settings: QueuedSettings):
        self.settings = settings
        self.timeout = httpx.Timeout(settings.timeout_secs)
        self._ssl_context: Optional[ssl.SSLContext] = None

    @property
    def ssl_context(self) -> ssl.SSLContext:
        """
        SSL context for https requests, loaded from the TLS settings on first use.

        Raises:
            FileNotFoundError: If a configured CA, cert or key file is missing
            ssl.SSLError: If a configured file is not valid PEM
        """
        if self._ssl_context is None:
            self._ssl_context = build_ssl_context(self.settings.tls)
        return self._ssl_context

    def resolve_url(self, path: str) -> httpx.URL:
        """
        Join the endpoint and path into an absolute URL.

        Plain http is kept only when explicitly requested; any other
        scheme is sent over https.

        Raises:
            QueuedInvalidUrlError: If the result is not an absolute URL
        """
        raw = f"{self.settings.endpoint}{path}"
        try:
            url = httpx.URL(raw)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise QueuedInvalidUrlError(f"Invalid queued URL {raw!r}: {e}") from e
        if not url.host:
            raise QueuedInvalidUrlError(f"Invalid queued URL {raw!r}: missing host")
        if url.scheme != "http":
            url = url.copy_with(scheme="https")
        return url

    def build_headers(self, has_body: bool) -> Dict[str, str]:
        """
        Request headers for one attempt.

        Args:
            has_body: Whether a msgpack body is sent

        Returns:
            Authorization (if an API key is configured) and Content-Type
            (only with a body)
        """
        headers = {}
        if self.settings.api_key is not None:
            headers["Authorization"] = self.settings.api_key
        if has_body:
            headers["Content-Type"] = MSGPACK_CONTENT_TYPE
        return headers

    async def send(self, method: str, url: httpx.URL, content: Optional[bytes] = None) -> Any:
        """
        Send one request and return its decoded body.

        Args:
            method: HTTP method
            url: Absolute URL from resolve_url()
            content: Encoded msgpack body, or None for no body

        Returns:
            Decoded msgpack value, or the body text for other content types

        Raises:
            QueuedUnauthorizedError: On HTTP 401
            QueuedApiError: On any other non-2xx status
            QueuedCodecError: If a 2xx msgpack body is malformed
            httpx.TransportError: On connection, protocol or timeout failures
            FileNotFoundError: If an https request needs a missing TLS file
        """
        extensions = {}
        verify = True
        if url.scheme == "https":
            verify = self.ssl_context
            if self.settings.tls.servername:
                extensions["sni_hostname"] = self.settings.tls.servername

        logger.debug("Sending queued request", method=method, url=str(url))

        async with httpx.AsyncClient(timeout=self.timeout, verify=verify) as client:
            response = await client.request(
                method,
                url,
                content=content,
                headers=self.build_headers(content is not None),
                extensions=extensions,
            )

        logger.debug(
            "Received queued response",
            method=method,
            url=str(url),
            status_code=response.status_code,
            response_time_ms=response.elapsed.total_seconds() * 1000
        )

        return self.handle_response(response)

    def handle_response(self, response: httpx.Response) -> Any:
        """
        Classify a fully read response into a body or an error.

        A non-2xx response always raises QueuedApiError with its status,
        even when its msgpack body cannot be decoded; the raw text is used
        as the error in that case.
        """
        if response.status_code == 401:
            raise QueuedUnauthorizedError()

        if 200 <= response.status_code <= 299:
            return self.decode_body(response)

        try:
            body = self.decode_body(response)
        except QueuedCodecError:
            body = response.content.decode("utf-8", errors="replace")

        error = body
        error_details = None
        if isinstance(body, dict):
            if body.get("error") is not None:
                error = body["error"]
            error_details = body.get("error_details")
        logger.warning(
            "Queued request failed",
            status_code=response.status_code,
            error=str(error)[:500]
        )
        raise QueuedApiError(response.status_code, error, error_details)

    @staticmethod
    def decode_body(response: httpx.Response) -> Any:
        """
        Decode a response body according to its Content-Type.

        Returns:
            The msgpack value (None for an empty msgpack body), or the
            body as UTF-8 text with invalid bytes replaced

        Raises:
            QueuedCodecError: If a msgpack body is malformed
        """
        if is_msgpack_content_type(response.headers.get("content-type")):
            if not response.content:
                return None
            return decode(response.content)
        return response.content.decode("utf-8", errors="replace")
