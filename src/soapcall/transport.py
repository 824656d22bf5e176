# soapcall/transport.py
"""
Transport for SOAP method calls.

A transport is any callable that takes a SoapHttpRequest and returns the
response body text. This is the only network boundary of the package:
calls never perform I/O themselves, so tests can inject a fake transport.

RequestsTransport is the default, built on requests.
"""

import logging
from typing import Protocol

import requests

from soapcall.models import SoapHttpRequest
from soapcall.utils.config_loader import ClientSection

# Set up module-level logger
logger: logging.Logger = logging.getLogger(__name__)

SESSION_COOKIE_PREFIX: str = '__sessiontoken='


class Transport(Protocol):
    """Sends a SOAP HTTP request and returns the response text."""

    def __call__(self, request: SoapHttpRequest) -> str: ...


def build_http_request(
    url: str,
    urn: str,
    method_name: str,
    body: str,
    session_token: str | None = None,
    security_token: str | None = None,
) -> SoapHttpRequest:
    """
    Describe the HTTP POST that carries a serialized envelope.

    Args:
        url: Endpoint URL of the SOAP router.
        urn: Namespace of the invoked method.
        method_name: Name of the invoked method.
        body: The serialized SOAP envelope.
        session_token: Session token sent as the __sessiontoken cookie.
        security_token: Security token sent in X-Security-Token.

    Returns:
        The request description handed to the transport.
    """
    headers: dict[str, str] = {
        'Content-type': 'application/soap+xml',
        'SoapAction': f'{urn}#{method_name}',
        'X-Security-Token': security_token or '',
        'Cookie': f'{SESSION_COOKIE_PREFIX}{session_token or ""}',
    }
    return SoapHttpRequest(url=url, method='POST', headers=headers, body=body)


class RequestsTransport:
    """
    Default transport: POST the envelope with requests.

    Attributes:
        request_timeout: (connect, read) timeouts in seconds.
        verify_ssl: Whether to verify SSL certificates.
    """

    def __init__(self, client_config: ClientSection | None = None) -> None:
        client_config = client_config or ClientSection()
        self.request_timeout: tuple[float, float] = client_config.request_timeout
        self.verify_ssl: bool = client_config.verify_ssl

    def __call__(self, request: SoapHttpRequest) -> str:
        """
        Send the request and return the response text.

        Raises:
            requests.exceptions.Timeout: If the request times out.
            requests.exceptions.HTTPError: If the server returns an HTTP error.
            requests.exceptions.RequestException: For other network-level errors.
        """
        soap_action: str = request.headers.get('SoapAction', '')

        try:
            logger.debug(
                'Sending SOAP request %r to %r (connect/read timeout=%r)',
                soap_action,
                request.url,
                self.request_timeout,
            )

            # Send the POST request with the SOAP envelope encoded as UTF-8 bytes
            response: requests.Response = requests.post(
                request.url,
                data=request.body.encode('utf-8'),
                headers=request.headers,
                timeout=self.request_timeout,
                verify=self.verify_ssl,
            )

            logger.debug(
                'Received response for %r: HTTP %r', soap_action, response.status_code
            )

            # SOAP Faults usually come back as 200 OK or 500; a 500 with a
            # Fault body is still an HTTP error at this level
            response.raise_for_status()

            return response.text

        except requests.exceptions.Timeout as timeout_error:
            logger.error(
                'Request timeout for %r after %r: %r',
                soap_action,
                self.request_timeout,
                timeout_error,
            )
            raise

        except requests.exceptions.HTTPError as http_error:
            logger.error('HTTP error for %r: %r', soap_action, http_error)

            logger.debug('***REQUEST BODY (XML)***')
            logger.debug(request.body)

            if http_error.response is not None:
                logger.debug('***RESPONSE BODY (XML)***')
                logger.debug(http_error.response.text)

            raise

        except requests.exceptions.RequestException as request_error:
            logger.error('Network error for %r: %r', soap_action, request_error)
            raise

    def __repr__(self) -> str:
        return (
            f'RequestsTransport(timeout={self.request_timeout}, '
            f'verify_ssl={self.verify_ssl})'
        )
