# soapcall/utils/xml_parser.py
"""
XML parsing utilities for SOAP responses.

Provides helper functions for parsing SOAP XML responses with proper
namespace handling, detecting SOAP Faults, and locating the response
element of a method call.
"""

import logging

from lxml import etree

from soapcall.exceptions import SoapFault, SoapParseError, SoapStructureError

logger: logging.Logger = logging.getLogger(__name__)

SOAP_ENV_NS: str = 'http://schemas.xmlsoap.org/soap/envelope/'
XSI_NS: str = 'http://www.w3.org/2001/XMLSchema-instance'

NAMESPACES: dict[str, str] = {
    'SOAP-ENV': SOAP_ENV_NS,
    'xsd': 'http://www.w3.org/2001/XMLSchema',
    'xsi': XSI_NS,
    'ns': 'http://xml.apache.org/xml-soap',
}

# Clark notation of the xsi:type attribute
XSI_TYPE: str = f'{{{XSI_NS}}}type'


def parse_xml_text(text: str) -> etree._Element:
    """
    Parse already-decoded XML text.

    The text is re-encoded as UTF-8 and parsed as such, so an encoding named
    in its XML declaration (e.g. ISO-8859-1) no longer applies.

    Raises:
        etree.XMLSyntaxError: If the text is not well-formed XML.
    """
    parser: etree.XMLParser = etree.XMLParser(encoding='utf-8')
    return etree.fromstring(text.encode('utf-8'), parser=parser)


def parse_soap_response(xml_string: str) -> etree._Element:
    """
    Parse a SOAP XML response string into an lxml Element.

    Args:
        xml_string: The raw XML response from the SOAP API.

    Returns:
        The root element of the parsed XML tree.

    Raises:
        SoapParseError: If the XML is malformed or empty.
    """
    try:
        return parse_xml_text(xml_string)
    except etree.XMLSyntaxError as e:
        logger.error('Failed to parse SOAP response: %r', e)
        raise SoapParseError(f'Malformed SOAP response: {e}') from e


def extract_soap_body(root: etree._Element) -> etree._Element:
    """
    Extract the Body element from a SOAP envelope.

    Args:
        root: The root element of the SOAP envelope.

    Returns:
        The Body element containing the actual response data.

    Raises:
        SoapStructureError: If no Body element is found.
    """
    body: etree._Element | None = root.find('SOAP-ENV:Body', namespaces=NAMESPACES)

    if body is None:
        logger.error('No SOAP Body element found in response')
        raise SoapStructureError('No SOAP Body element found in response')

    return body


def check_for_soap_fault(body: etree._Element) -> None:
    """
    Check if the SOAP body contains a Fault element and raise if found.

    Args:
        body: The Body element of the SOAP envelope.

    Raises:
        SoapFault: If a SOAP Fault is found in the response.
    """
    fault: etree._Element | None = body.find('SOAP-ENV:Fault', namespaces=NAMESPACES)

    if fault is not None:
        fault_code: str = fault.findtext('faultcode', default='')
        fault_string: str = fault.findtext('faultstring', default='')

        detail_element: etree._Element | None = fault.find('detail')
        detail: str = (
            ''.join(detail_element.itertext()) if detail_element is not None else ''
        )

        logger.warning('SOAP Fault [%s]: %s', fault_code, fault_string)
        raise SoapFault(fault_code, fault_string, detail)


def find_method_response(body: etree._Element, method_name: str) -> etree._Element:
    """
    Find the <methodName>Response element among the children of the body.

    Sibling elements with any other name are ignored. The response element
    may or may not be namespace qualified.

    Raises:
        SoapStructureError: If there is no such element.
    """
    expected_name: str = f'{method_name}Response'

    for child in body.iterchildren(tag=etree.Element):
        if etree.QName(child).localname == expected_name:
            return child

    logger.error('No <%s> element in SOAP body', expected_name)
    raise SoapStructureError(
        f'Empty or missing SOAP body content: no <{expected_name}> element found'
    )


def parse_method_response(xml_string: str, method_name: str) -> list[etree._Element]:
    """
    Parse a complete method call response into its ordered parameters.

    Args:
        xml_string: The raw XML response text.
        method_name: Name of the invoked method.

    Returns:
        The child elements of the <methodName>Response element, in
        document order.

    Raises:
        SoapParseError: If the text is not well-formed XML.
        SoapStructureError: If the body or the response element is missing.
        SoapFault: If the body carries a SOAP Fault.
    """
    root: etree._Element = parse_soap_response(xml_string)
    body: etree._Element = extract_soap_body(root)
    check_for_soap_fault(body)
    response: etree._Element = find_method_response(body, method_name)

    parameters: list[etree._Element] = list(response.iterchildren(tag=etree.Element))
    logger.debug(
        'Parsed %r response with %d parameters', method_name, len(parameters)
    )
    return parameters
