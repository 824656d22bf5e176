# soapcall/method_call.py
"""
SOAP method call.

A SoapMethodCall is single use: write its parameters, execute it once
against an endpoint, then read the response parameters back in order.

Usage:
    >>> call = SoapMethodCall('xtk:session', 'GetOption', session_token)
    >>> call.write_string('name', 'NmsServer_URL')
    >>> call.execute('https://host/nl/jsp/soaprouter.jsp')
    >>> value = call.get_next_string()
    >>> call.check_no_more_args()
    True
"""

import logging
from datetime import date, datetime
from typing import Any

from lxml import etree

from soapcall.coercion import XsdType, encode
from soapcall.models import RequestParameter, SoapHttpRequest
from soapcall.request_builder import build_envelope, create_element, serialize_envelope
from soapcall.response_reader import ResponseReader
from soapcall.transport import RequestsTransport, Transport, build_http_request
from soapcall.utils.xml_parser import parse_method_response

logger: logging.Logger = logging.getLogger(__name__)


class SoapMethodCall:
    """
    One call of a remote SOAP method.

    Attributes:
        urn: Namespace of the method, e.g. 'xtk:session'.
        method_name: Name of the remote method.
        session_token: Session token, or None for an anonymous call.
        security_token: Security token, or None.
        transport: Callable that sends the HTTP request and returns the
                   response text. Defaults to a RequestsTransport.
        parameters: The typed request parameters, in call order.
        response: Reader over the response parameters. Empty until the call
                  has been executed.
    """

    def __init__(
        self,
        urn: str,
        method_name: str,
        session_token: str | None = None,
        security_token: str | None = None,
        transport: Transport | None = None,
    ) -> None:
        self.urn: str = urn
        self.method_name: str = method_name
        self.session_token: str | None = session_token
        self.security_token: str | None = security_token
        self.transport: Transport = transport or RequestsTransport()
        self.parameters: list[RequestParameter] = []
        self.response: ResponseReader = ResponseReader()

    # ========================================================================
    # Request Parameters
    # ========================================================================

    def _write(self, name: str, xsd_type: XsdType, value: Any) -> None:
        parameter = RequestParameter(
            name=name, xsd_type=xsd_type, value=encode(xsd_type, value)
        )
        logger.debug('Writing parameter %r as %s', name, xsd_type.value)
        self.parameters.append(parameter)

    def write_boolean(self, name: str, value: Any) -> None:
        self._write(name, XsdType.BOOLEAN, value)

    def write_byte(self, name: str, value: Any) -> None:
        """Write a byte, rounded and clamped to [-128, 127]."""
        self._write(name, XsdType.BYTE, value)

    def write_short(self, name: str, value: Any) -> None:
        self._write(name, XsdType.SHORT, value)

    def write_long(self, name: str, value: Any) -> None:
        """Write a long. It is sent as xsd:int, rounded but not clamped."""
        self._write(name, XsdType.INT, value)

    def write_float(self, name: str, value: Any) -> None:
        self._write(name, XsdType.FLOAT, value)

    def write_double(self, name: str, value: Any) -> None:
        self._write(name, XsdType.DOUBLE, value)

    def write_string(self, name: str, value: Any) -> None:
        self._write(name, XsdType.STRING, value)

    def write_timestamp(self, name: str, value: date | datetime | str | None) -> None:
        self._write(name, XsdType.DATETIME, value)

    def write_date(self, name: str, value: date | datetime | str | None) -> None:
        """Write a date. Any time of day is dropped (midnight UTC is sent)."""
        self._write(name, XsdType.DATE, value)

    def write_element(self, name: str, value: etree._Element | str | None) -> None:
        self._write(name, XsdType.ELEMENT, value)

    def write_document(
        self, name: str, value: etree._ElementTree | etree._Element | str | None
    ) -> None:
        self._write(name, XsdType.DOCUMENT, value)

    def create_element(self, tag_name: str) -> etree._Element:
        """Create a detached element, e.g. to pass to write_element()."""
        return create_element(tag_name)

    # ========================================================================
    # Execution
    # ========================================================================

    def create_http_request(self, url: str) -> SoapHttpRequest:
        """
        Build the HTTP request for this call without sending it.

        Args:
            url: Endpoint URL of the SOAP router.

        Returns:
            The request description that execute() hands to the transport.
        """
        envelope: etree._Element = build_envelope(
            self.urn,
            self.method_name,
            self.parameters,
            session_token=self.session_token,
            security_token=self.security_token,
        )
        return build_http_request(
            url,
            self.urn,
            self.method_name,
            serialize_envelope(envelope),
            session_token=self.session_token,
            security_token=self.security_token,
        )

    def execute(self, url: str) -> None:
        """
        Send the call and prepare its response parameters for reading.

        Args:
            url: Endpoint URL of the SOAP router.

        Raises:
            SoapParseError: If the response is not well-formed XML.
            SoapStructureError: If the response has no body or no
                                <methodName>Response element.
            SoapFault: If the server answered with a SOAP Fault.
            Exception: Whatever the transport raises, unchanged.
        """
        request: SoapHttpRequest = self.create_http_request(url)
        logger.info('Executing SOAP method %r#%r', self.urn, self.method_name)

        # A failed execution must not leave an earlier response readable
        self.response = ResponseReader()

        response_text: str = self.transport(request)

        self.response = ResponseReader(
            parse_method_response(response_text, self.method_name)
        )
        logger.debug(
            'SOAP method %r returned %d parameters', self.method_name, len(self.response)
        )

    # ========================================================================
    # Response Parameters
    # ========================================================================

    def get_next_string(self) -> str:
        return self.response.read(XsdType.STRING)

    def get_next_boolean(self) -> bool:
        return self.response.read(XsdType.BOOLEAN)

    def get_next_byte(self) -> int:
        return self.response.read(XsdType.BYTE)

    def get_next_short(self) -> int:
        return self.response.read(XsdType.SHORT)

    def get_next_long(self) -> int:
        return self.response.read(XsdType.INT)

    def get_next_float(self) -> float:
        return self.response.read(XsdType.FLOAT)

    def get_next_double(self) -> float:
        return self.response.read(XsdType.DOUBLE)

    def get_next_datetime(self) -> datetime | None:
        return self.response.read(XsdType.DATETIME)

    def get_next_date(self) -> datetime | None:
        """Read a date as an aware UTC datetime at midnight."""
        return self.response.read(XsdType.DATE)

    def get_next_element(self) -> etree._Element | None:
        """Read an Element parameter: its detached child, or None if empty."""
        return self.response.read(XsdType.ELEMENT)

    def get_next_document(self) -> etree._ElementTree | None:
        return self.response.read(XsdType.DOCUMENT)

    def check_no_more_args(self) -> bool:
        """Return True once every response parameter has been read."""
        return self.response.check_no_more_args()

    def __repr__(self) -> str:
        return (
            f'SoapMethodCall('
            f'method={self.urn}#{self.method_name}, '
            f'parameters={len(self.parameters)}, '
            f'authenticated={bool(self.session_token)}'
            f')'
        )
