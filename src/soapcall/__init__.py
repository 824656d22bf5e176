# soapcall/__init__.py

from .client import SoapClient
from .coercion import XsdType
from .exceptions import (
    SoapDecodeError,
    SoapError,
    SoapFault,
    SoapParseError,
    SoapRangeError,
    SoapStructureError,
    SoapTypeError,
)
from .method_call import SoapMethodCall
from .models import RequestParameter, SoapHttpRequest
from .transport import RequestsTransport, Transport

__all__: list[str] = [
    # models.py
    'RequestParameter',
    # transport.py
    'RequestsTransport',
    # client.py
    'SoapClient',
    # exceptions.py
    'SoapDecodeError',
    'SoapError',
    'SoapFault',
    'SoapHttpRequest',
    # method_call.py
    'SoapMethodCall',
    'SoapParseError',
    'SoapRangeError',
    'SoapStructureError',
    'SoapTypeError',
    'Transport',
    # coercion.py
    'XsdType',
]
