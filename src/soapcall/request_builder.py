# soapcall/request_builder.py
"""
SOAP request envelope builder.

The fixed part of the envelope (namespaces, header tokens and the method
element) is rendered from a Jinja2 template. The typed parameters are then
appended to the method element with lxml, because Element and Document
parameters carry XML nodes that must be imported rather than escaped.
"""

import copy
import logging
from collections.abc import Iterable
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template
from lxml import etree

from soapcall.coercion import XsdType
from soapcall.models import RequestParameter
from soapcall.utils.xml_parser import NAMESPACES, XSI_TYPE

logger: logging.Logger = logging.getLogger(__name__)

ENVELOPE_TEMPLATE: str = 'envelope.xml'
SESSION_TOKEN_PARAMETER: str = 'sessiontoken'

_templates_dir: Path = Path(__file__).parent / 'templates'

_jinja_env: Environment = Environment(
    loader=FileSystemLoader(str(_templates_dir)),
    autoescape=True,  # Tokens and names are user data
    trim_blocks=True,
    lstrip_blocks=True,
)

# remove_blank_text keeps the template's indentation out of the method
# element so appended parameters serialize cleanly
_envelope_parser: etree.XMLParser = etree.XMLParser(remove_blank_text=True)


def create_element(tag_name: str) -> etree._Element:
    """Create a detached XML element, e.g. to build an Element parameter."""
    return etree.Element(tag_name)


def _append_parameter(
    method_element: etree._Element,
    name: str,
    xsd_type: XsdType,
    value: str | etree._Element | None,
) -> None:
    parameter: etree._Element = etree.SubElement(method_element, name)
    parameter.set(XSI_TYPE, xsd_type.value)

    if isinstance(value, etree._Element):
        # Copy so the queued parameter is never re-parented into an envelope
        parameter.append(copy.deepcopy(value))
    elif value:
        parameter.text = value


def build_envelope(
    urn: str,
    method_name: str,
    parameters: Iterable[RequestParameter],
    session_token: str | None = None,
    security_token: str | None = None,
) -> etree._Element:
    """
    Build the SOAP envelope for one method call.

    The method element always starts with the implicit 'sessiontoken'
    string parameter, followed by the given parameters in order.

    Args:
        urn: Namespace of the method; the method element is bound to 'urn:<urn>'.
        method_name: Name of the remote method.
        parameters: The call's typed parameters, in call order.
        session_token: Session token, or None for an anonymous call.
        security_token: Security token, or None.

    Returns:
        The root SOAP-ENV:Envelope element.

    Raises:
        jinja2.TemplateNotFound: If the envelope template is missing.
    """
    template: Template = _jinja_env.get_template(ENVELOPE_TEMPLATE)
    rendered_xml: str = template.render(
        urn=urn,
        method_name=method_name,
        session_token=session_token or '',
        security_token=security_token or '',
    )

    envelope: etree._Element = etree.fromstring(
        rendered_xml.encode('utf-8'), parser=_envelope_parser
    )
    body: etree._Element = envelope.find('SOAP-ENV:Body', namespaces=NAMESPACES)
    method_element: etree._Element = body[0]

    _append_parameter(
        method_element, SESSION_TOKEN_PARAMETER, XsdType.STRING, session_token or ''
    )

    count: int = 0
    for parameter in parameters:
        _append_parameter(
            method_element, parameter.name, parameter.xsd_type, parameter.value
        )
        count += 1

    logger.debug(
        'Built envelope for %r#%r with %d parameters', urn, method_name, count
    )
    return envelope


def serialize_envelope(envelope: etree._Element) -> str:
    """Serialize an envelope to text, with a UTF-8 XML declaration."""
    return etree.tostring(envelope, xml_declaration=True, encoding='UTF-8').decode(
        'utf-8'
    )
