# soapcall/utils/__init__.py

from .config_loader import SoapCallConfig, load_config
from .datetime_utils import format_for_soap, parse_iso_instant
from .logger import setup_logger, setup_logger_from_config
from .xml_parser import (
    check_for_soap_fault,
    extract_soap_body,
    find_method_response,
    parse_method_response,
    parse_soap_response,
)

__all__: list[str] = [
    # config_loader.py
    'SoapCallConfig',
    # xml_parser.py
    'check_for_soap_fault',
    'extract_soap_body',
    'find_method_response',
    # datetime_utils.py
    'format_for_soap',
    'load_config',
    'parse_iso_instant',
    'parse_method_response',
    'parse_soap_response',
    # logger.py
    'setup_logger',
    'setup_logger_from_config',
]
