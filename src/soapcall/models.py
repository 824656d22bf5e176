# soapcall/models.py
"""
Pydantic models for SOAP method call requests.

RequestParameter is one typed parameter queued on a call; SoapHttpRequest
is the transport-neutral description of the HTTP request handed to the
transport delegate.
"""

from typing import Literal

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field

from soapcall.coercion import XsdType


class RequestParameter(BaseModel):
    """
    A single typed parameter of a SOAP method call.

    Attributes:
        name: Element name of the parameter inside the method element.
        xsd_type: Type tag written to the xsi:type attribute.
        value: Encoded text for scalar types; a detached lxml element, or
               None for an empty parameter, for Element and Document types.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    xsd_type: XsdType
    value: str | etree._Element | None = None


class SoapHttpRequest(BaseModel):
    """
    Description of the HTTP request carrying a SOAP envelope.

    This is the only thing a transport delegate receives: it POSTs body to
    url with headers and returns the response text.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    method: Literal['POST'] = 'POST'
    headers: dict[str, str] = Field(default_factory=dict)
    body: str
