# soapcall/exceptions.py
"""
Exception hierarchy for SOAP method calls.

Every error raised by the package derives from SoapError so callers can
catch them as a group. Transport errors are not wrapped: whatever the
transport delegate raises reaches the caller unchanged.
"""


class SoapError(Exception):
    """Base class for all soapcall errors."""


class SoapParseError(SoapError, ValueError):
    """The response text is not well-formed XML."""


class SoapStructureError(SoapError, ValueError):
    """The response is XML but not a usable SOAP envelope."""


class SoapFault(SoapError):
    """
    A SOAP Fault returned by the server in place of a normal response.

    Attributes:
        faultcode: Content of the <faultcode> element.
        faultstring: Content of the <faultstring> element.
        detail: Text content of the <detail> element.
    """

    def __init__(self, faultcode: str, faultstring: str, detail: str = '') -> None:
        super().__init__(f'SOAP Fault [{faultcode}]: {faultstring}')
        self.faultcode: str = faultcode
        self.faultstring: str = faultstring
        self.detail: str = detail


class SoapTypeError(SoapError, TypeError):
    """A response parameter was read with a getter for another type."""


class SoapDecodeError(SoapError, ValueError):
    """A response parameter's text cannot be decoded as its declared type."""


class SoapRangeError(SoapError, IndexError):
    """A response parameter was read after all of them were consumed."""
