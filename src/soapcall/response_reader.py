# soapcall/response_reader.py
"""
Sequential reader over the parameters of a SOAP method response.

Response parameters are positional: their element names are ignored and
the caller reads them back in order with a getter matching each
parameter's xsi:type. A read that fails, for any reason, leaves the
cursor where it was.
"""

import logging
from typing import Any

from lxml import etree

from soapcall.coercion import CODECS, XsdCodec, XsdType
from soapcall.exceptions import SoapRangeError, SoapTypeError
from soapcall.utils.xml_parser import XSI_TYPE

logger: logging.Logger = logging.getLogger(__name__)


class ResponseReader:
    """
    Cursor over the ordered response parameters of one method call.

    Attributes:
        parameters: The response parameter elements, in document order.
        index: Position of the next parameter to read. Only moves forward.
    """

    def __init__(self, parameters: list[etree._Element] | None = None) -> None:
        self.parameters: list[etree._Element] = list(parameters or [])
        self.index: int = 0

    def read(self, xsd_type: XsdType) -> Any:
        """
        Read, check and decode the parameter at the cursor, then advance.

        Args:
            xsd_type: The type the caller expects the next parameter to be.

        Returns:
            The decoded value.

        Raises:
            SoapRangeError: If every parameter has already been read.
            SoapTypeError: If the parameter's xsi:type is not the expected one.
            SoapDecodeError: If the parameter's content cannot be decoded.
        """
        if self.index >= len(self.parameters):
            raise SoapRangeError(
                f'No more response parameters to read as {xsd_type.value} '
                f'({len(self.parameters)} available)'
            )

        parameter: etree._Element = self.parameters[self.index]
        codec: XsdCodec = CODECS[xsd_type]
        actual_type: str | None = parameter.get(XSI_TYPE)

        if actual_type not in codec.accepted_tags:
            logger.debug(
                'Type mismatch at parameter %d: expected %r, found %r',
                self.index,
                xsd_type.value,
                actual_type,
            )
            raise SoapTypeError(
                f'Response parameter {self.index} is of type {actual_type!r}, '
                f'not {xsd_type.value!r}'
            )

        value: Any = codec.decode(parameter)
        self.index += 1
        return value

    def check_no_more_args(self) -> bool:
        """Return True if every response parameter has been read."""
        return self.index == len(self.parameters)

    def __len__(self) -> int:
        return len(self.parameters)

    def __repr__(self) -> str:
        return f'ResponseReader(index={self.index}, length={len(self.parameters)})'
