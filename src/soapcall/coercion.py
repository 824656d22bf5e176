# soapcall/coercion.py
"""
Value coercion rules between Python values and SOAP/XSD typed XML.

Each supported kind has a canonical type tag (the xsi:type value), an
encoder that turns an arbitrary Python value into the text (or XML node)
sent in a request, and a decoder that turns a response parameter element
back into a Python value. The rules live in a fixed table, CODECS, keyed
by XsdType, so the request builder and the response reader never inspect
values themselves.

Numeric encoders are lenient: anything that cannot be read as a finite
number becomes 0. Decoders are strict: malformed text raises
SoapDecodeError.
"""

import copy
import math
from collections.abc import Callable
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import Any, NamedTuple, cast

from lxml import etree

from soapcall.exceptions import SoapDecodeError
from soapcall.utils.datetime_utils import (
    format_for_soap,
    parse_iso_instant,
    truncate_to_utc_midnight,
)
from soapcall.utils.xml_parser import parse_xml_text

# Encoded request content: text for scalars, a detached element (or None)
# for Element and Document parameters
EncodedValue = str | etree._Element | None

BYTE_MIN: int = -128
BYTE_MAX: int = 127


class XsdType(StrEnum):
    """Type tags written to, and expected in, the xsi:type attribute."""

    BOOLEAN = 'xsd:boolean'
    BYTE = 'xsd:byte'
    SHORT = 'xsd:short'
    # Long values travel as 32-bit xsd:int
    INT = 'xsd:int'
    FLOAT = 'xsd:float'
    DOUBLE = 'xsd:double'
    STRING = 'xsd:string'
    DATETIME = 'xsd:datetime'
    DATE = 'xsd:date'
    ELEMENT = 'ns:Element'
    DOCUMENT = 'ns:Document'


# =============================================================================
# Number Helpers
# =============================================================================


def to_number(value: Any) -> int | float:
    """
    Coerce an arbitrary value to a finite number.

    None, NaN, infinities and strings that do not parse as a number all
    become 0. Booleans become 1 or 0. Numeric strings such as '12' or
    '1.e2' are parsed as floats.
    """
    if value is None:
        return 0

    if isinstance(value, bool):
        return int(value)

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        text: str = value.strip()
        if not text:
            return 0
        try:
            value = float(text)
        except ValueError:
            return 0

    if isinstance(value, float | Decimal):
        return float(value) if math.isfinite(value) else 0

    return 0


def round_half_away_from_zero(number: int | float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Examples:
        >>> round_half_away_from_zero(5.5)
        6
        >>> round_half_away_from_zero(-5.5)
        -6
    """
    if isinstance(number, int):
        return number

    # repr() gives the shortest decimal that round-trips the float, so
    # Decimal sees 2.5 rather than its binary expansion
    return int(Decimal(repr(number)).to_integral_value(rounding=ROUND_HALF_UP))


def format_number(number: int | float) -> str:
    """
    Render a number in canonical form.

    Floats use their shortest round-trip digits. Values with a magnitude in
    [1e-6, 1e21) are written in positional notation, others with an
    exponent. Infinities render as 'Infinity' and '-Infinity'.

    Examples:
        >>> format_number(100.0)
        '100'
        >>> format_number(1e-7)
        '1e-7'
        >>> format_number(1.5e22)
        '1.5e+22'
    """
    if isinstance(number, int):
        return str(number)

    if math.isinf(number):
        return 'Infinity' if number > 0 else '-Infinity'

    if number == 0:
        return '0'

    sign: str = '-' if number < 0 else ''
    _, digit_tuple, exponent = Decimal(repr(abs(number))).normalize().as_tuple()
    digits: str = ''.join(map(str, digit_tuple))
    # Position of the decimal point relative to the start of digits
    point: int = len(digits) + cast(int, exponent)

    if len(digits) <= point <= 21:
        text: str = digits + '0' * (point - len(digits))
    elif 0 < point <= 21:
        text = f'{digits[:point]}.{digits[point:]}'
    elif -6 < point <= 0:
        text = f'0.{"0" * -point}{digits}'
    else:
        mantissa: str = digits[0] + (f'.{digits[1:]}' if len(digits) > 1 else '')
        power: int = point - 1
        text = f'{mantissa}e{"+" if power > 0 else "-"}{abs(power)}'

    return sign + text


# =============================================================================
# Encoders
# =============================================================================


def encode_boolean(value: Any) -> str:
    if value is None:
        return 'false'

    if isinstance(value, str):
        truthy: bool = value not in ('', 'false')
    elif isinstance(value, float) and math.isnan(value):
        truthy = False
    else:
        truthy = bool(value)

    return 'true' if truthy else 'false'


def encode_byte(value: Any) -> str:
    rounded: int = round_half_away_from_zero(to_number(value))
    return str(max(BYTE_MIN, min(BYTE_MAX, rounded)))


def encode_integer(value: Any) -> str:
    """Encode a short or long value: rounded, never clamped."""
    return str(round_half_away_from_zero(to_number(value)))


def encode_decimal(value: Any) -> str:
    """Encode a float or double value with its full precision."""
    return format_number(to_number(value))


def encode_string(value: Any) -> str:
    if value is None:
        return ''

    if isinstance(value, bool):
        return 'true' if value else 'false'

    if isinstance(value, int | float):
        if isinstance(value, float) and math.isnan(value):
            return ''
        return format_number(value)

    if isinstance(value, str):
        return value

    return str(value)


def encode_timestamp(value: date | datetime | str | None) -> str:
    if value is None or value == '':
        return ''
    return format_for_soap(value)


def encode_date(value: date | datetime | str | None) -> str:
    if value is None or value == '':
        return ''
    return format_for_soap(truncate_to_utc_midnight(value))


def encode_element(value: Any) -> etree._Element | None:
    """
    Produce a detached element to import under an Element parameter.

    Accepts None, an lxml element, an ElementTree (its root is used) or XML
    text. Empty text counts as no value.

    Raises:
        etree.XMLSyntaxError: If XML text is malformed.
        TypeError: For any other kind of value.
    """
    if value is None:
        return None

    if isinstance(value, etree._ElementTree):
        value = value.getroot()

    if isinstance(value, str):
        if not value.strip():
            return None
        return parse_xml_text(value)

    if isinstance(value, bytes):
        if not value.strip():
            return None
        return etree.fromstring(value)

    if isinstance(value, etree._Element):
        imported: etree._Element = copy.deepcopy(value)
        imported.tail = None
        return imported

    raise TypeError(f'Cannot use {type(value)!r} as an XML element parameter')


# =============================================================================
# Decoders
# =============================================================================
# Every decoder takes the response parameter element itself.


def _text_of(parameter: etree._Element) -> str:
    return ''.join(parameter.itertext())


def decode_string(parameter: etree._Element) -> str:
    return _text_of(parameter)


def decode_boolean(parameter: etree._Element) -> bool:
    return _text_of(parameter).strip() in ('true', '1')


def decode_integer(parameter: etree._Element) -> int:
    """
    Decode integer text. A fractional part is truncated ('3.7' -> 3).

    Raises:
        SoapDecodeError: If the text is not a finite number.
    """
    text: str = _text_of(parameter).strip()
    try:
        return int(text)
    except ValueError:
        pass

    try:
        number: float = float(text)
    except ValueError as e:
        raise SoapDecodeError(f'Cannot decode {text!r} as an integer') from e

    if not math.isfinite(number):
        raise SoapDecodeError(f'Cannot decode {text!r} as an integer')

    return int(number)


def decode_decimal(parameter: etree._Element) -> float:
    text: str = _text_of(parameter).strip()
    try:
        return float(text)
    except ValueError as e:
        raise SoapDecodeError(f'Cannot decode {text!r} as a float') from e


def decode_datetime(parameter: etree._Element) -> datetime | None:
    """
    Decode an ISO instant into an aware UTC datetime, or None if empty.

    Date parameters decode the same way; the value is already truncated to
    midnight UTC by the server.
    """
    text: str = _text_of(parameter).strip()
    if not text:
        return None

    try:
        return parse_iso_instant(text)
    except ValueError as e:
        raise SoapDecodeError(f'Cannot decode {text!r} as a datetime') from e


def decode_element(parameter: etree._Element) -> etree._Element | None:
    """Return a detached copy of the parameter's first child element."""
    child: etree._Element | None = next(
        parameter.iterchildren(tag=etree.Element), None
    )
    if child is None:
        return None

    detached: etree._Element = copy.deepcopy(child)
    detached.tail = None
    # Drop the envelope's namespace declarations carried over by the copy
    etree.cleanup_namespaces(detached)
    return detached


def decode_document(parameter: etree._Element) -> etree._ElementTree | None:
    root: etree._Element | None = decode_element(parameter)
    if root is None:
        return None
    return etree.ElementTree(root)


# =============================================================================
# Decision Table
# =============================================================================


class XsdCodec(NamedTuple):
    """Encode/decode pair for one XSD type, plus the tags a reader accepts."""

    encode: Callable[[Any], EncodedValue]
    decode: Callable[[etree._Element], Any]
    accepted_tags: frozenset[str]


def _codec(
    xsd_type: XsdType,
    encode: Callable[[Any], EncodedValue],
    decode: Callable[[etree._Element], Any],
    *extra_tags: str,
) -> XsdCodec:
    return XsdCodec(encode, decode, frozenset({xsd_type.value, *extra_tags}))


CODECS: dict[XsdType, XsdCodec] = {
    XsdType.BOOLEAN: _codec(XsdType.BOOLEAN, encode_boolean, decode_boolean),
    XsdType.BYTE: _codec(XsdType.BYTE, encode_byte, decode_integer),
    XsdType.SHORT: _codec(XsdType.SHORT, encode_integer, decode_integer),
    XsdType.INT: _codec(XsdType.INT, encode_integer, decode_integer),
    XsdType.FLOAT: _codec(XsdType.FLOAT, encode_decimal, decode_decimal),
    XsdType.DOUBLE: _codec(XsdType.DOUBLE, encode_decimal, decode_decimal),
    XsdType.STRING: _codec(XsdType.STRING, encode_string, decode_string),
    # Servers answer with the schema spelling xsd:dateTime
    XsdType.DATETIME: _codec(
        XsdType.DATETIME, encode_timestamp, decode_datetime, 'xsd:dateTime'
    ),
    XsdType.DATE: _codec(XsdType.DATE, encode_date, decode_datetime),
    XsdType.ELEMENT: _codec(XsdType.ELEMENT, encode_element, decode_element),
    XsdType.DOCUMENT: _codec(XsdType.DOCUMENT, encode_element, decode_document),
}


def encode(xsd_type: XsdType, value: Any) -> EncodedValue:
    """Encode a value for a request parameter of the given type."""
    return CODECS[xsd_type].encode(value)
