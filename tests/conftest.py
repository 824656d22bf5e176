"""Pytest configuration and shared fixtures for soapcall tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml
from lxml import etree

from soapcall.models import SoapHttpRequest
from soapcall.utils import SoapCallConfig

URL = 'https://soap-test/nl/jsp/soaprouter.jsp'

ENVELOPE_NAMESPACES = (
    "xmlns:xsd='http://www.w3.org/2001/XMLSchema' "
    "xmlns:xsi='http://www.w3.org/2001/XMLSchema-instance' "
    "xmlns:SOAP-ENV='http://schemas.xmlsoap.org/soap/envelope/' "
    "xmlns:ns='http://xml.apache.org/xml-soap'"
)

XSI_TYPE = '{http://www.w3.org/2001/XMLSchema-instance}type'

# (name, xsi:type, value) of one response parameter
ResponseParameter = tuple[str, str, str]


class FakeTransport:
    """Transport double: records requests and returns a canned response."""

    def __init__(self, response_text: str = '', error: Exception | None = None) -> None:
        self.response_text: str = response_text
        self.error: Exception | None = error
        self.requests: list[SoapHttpRequest] = []

    def __call__(self, request: SoapHttpRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response_text


@pytest.fixture
def url() -> str:
    """Endpoint URL used by call tests."""
    return URL


@pytest.fixture
def fake_transport() -> type[FakeTransport]:
    """Give tests the FakeTransport class to build transports with."""
    return FakeTransport


@pytest.fixture
def make_soap_response() -> Callable[..., str]:
    """Build a SOAP response for a method with the given typed parameters."""

    def _make(method_name: str, *parameters: ResponseParameter) -> str:
        parser = etree.XMLParser(remove_blank_text=True)
        root = etree.fromstring(
            f'<SOAP-ENV:Envelope {ENVELOPE_NAMESPACES}>'
            f'<SOAP-ENV:Body><{method_name}Response/></SOAP-ENV:Body>'
            f'</SOAP-ENV:Envelope>',
            parser=parser,
        )
        response = root[0][0]
        for name, xsd_type, value in parameters:
            parameter = etree.SubElement(response, name)
            if xsd_type in ('ns:Element', 'ns:Document'):
                if value:
                    parameter.append(etree.fromstring(value))
            else:
                parameter.text = value
            parameter.set(XSI_TYPE, xsd_type)
        return etree.tostring(root, encoding='unicode')

    return _make


@pytest.fixture
def soap_response_with_no_body() -> str:
    """A SOAP envelope without a Body element."""
    return f"""<?xml version='1.0' encoding='UTF-8'?>
<SOAP-ENV:Envelope {ENVELOPE_NAMESPACES}>
</SOAP-ENV:Envelope>"""


@pytest.fixture
def soap_response_with_empty_body() -> str:
    """A SOAP envelope with an empty Body element."""
    return f"""<?xml version='1.0' encoding='UTF-8'?>
<SOAP-ENV:Envelope {ENVELOPE_NAMESPACES}>
    <SOAP-ENV:Body>
    </SOAP-ENV:Body>
</SOAP-ENV:Envelope>"""


@pytest.fixture
def soap_response_with_extra_elements() -> str:
    """A response for method 'Extra' surrounded by stray sibling elements."""
    return f"""<?xml version='1.0' encoding='UTF-8'?>
<SOAP-ENV:Envelope {ENVELOPE_NAMESPACES}>
    <SOAP-ENV:Body>
        <extra/>
        <extra/>
        <ExtraResponse>
        </ExtraResponse>
        <extra/>
    </SOAP-ENV:Body>
</SOAP-ENV:Envelope>"""


@pytest.fixture
def soap_fault() -> str:
    """A SOAP fault response."""
    return f"""<?xml version='1.0' encoding='UTF-8'?>
<SOAP-ENV:Envelope {ENVELOPE_NAMESPACES}>
    <SOAP-ENV:Body>
        <SOAP-ENV:Fault>
            <faultcode>-53</faultcode>
            <faultstring>failed</faultstring>
            <detail>The SOAP call failed</detail>
        </SOAP-ENV:Fault>
    </SOAP-ENV:Body>
</SOAP-ENV:Envelope>"""


@pytest.fixture
def sample_config() -> SoapCallConfig:
    """Create a sample SoapCallConfig for testing."""
    config_dict: dict[str, Any] = {
        'endpoint': {
            'url': 'https://test.example.com/nl/jsp/soaprouter.jsp',
            'session_token': '$session$',
            'security_token': '$security$',
        },
        'client': {
            'request_timeout': [10, 30],
            'verify_ssl': True,
        },
        'logging': {
            'console_level': 'INFO',
        },
    }
    return SoapCallConfig.model_validate(config_dict)


@pytest.fixture
def temp_config_file(tmp_path: Path, sample_config: SoapCallConfig) -> Path:
    """Create a temporary config file for testing."""
    config_path: Path = tmp_path / 'config.yaml'

    config_dict: dict[str, Any] = sample_config.model_dump(mode='json')
    # SecretStr dumps masked; write the real values back
    config_dict['endpoint']['session_token'] = '$session$'
    config_dict['endpoint']['security_token'] = '$security$'

    config_path.write_text(yaml.safe_dump(config_dict, sort_keys=False))

    return config_path
