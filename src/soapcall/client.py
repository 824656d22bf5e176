# soapcall/client.py
"""
SOAP Client

This module provides a configuration-driven entry point for making SOAP
method calls. The client owns the endpoint URL, the session and security
tokens and the transport, and hands out SoapMethodCall objects that are
already wired to them.
"""

import logging
from pathlib import Path

from soapcall.method_call import SoapMethodCall
from soapcall.transport import RequestsTransport, Transport
from soapcall.utils import SoapCallConfig, load_config, setup_logger_from_config

# Set up module-level logger
logger: logging.Logger = logging.getLogger(__name__)


class SoapClient:
    """
    Factory and executor for SOAP method calls against one endpoint.

    Attributes:
        config: The validated configuration.
        endpoint_url: URL of the SOAP router.
        session_token: Session token passed to every call, or None.
        security_token: Security token passed to every call, or None.
        transport: Transport shared by every call created by this client.

    Usage:
        >>> client = SoapClient(Path('/etc/soapcall/config.yaml'))
        >>> call = client.create_method_call('xtk:session', 'GetOption')
        >>> call.write_string('name', 'NmsServer_URL')
        >>> client.execute(call)
        >>> value = call.get_next_string()
    """

    def __init__(
        self,
        config_path: Path | None = None,
        config: SoapCallConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        """
        Initialize the client from configuration.

        Args:
            config_path: Optional path to the configuration file. If None,
                         the default location is used (see load_config()).
            config: Optional pre-loaded SoapCallConfig. If provided,
                    config_path is ignored.
            transport: Optional transport. Defaults to a RequestsTransport
                       built from the 'client' section of the configuration.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ValidationError: If the config file is invalid.
        """
        if config is not None:
            self.config: SoapCallConfig = config
            logger.debug('Initializing SoapClient with injected configuration')
        elif config_path is not None:
            logger.info('Loading SOAP configuration from: %r', config_path)
            self.config = load_config(config_path)
        else:
            logger.info('Loading SOAP configuration from default location')
            self.config = load_config()

        setup_logger_from_config(self.config.logging)

        self.endpoint_url: str = self.config.endpoint.url
        self.session_token: str | None = self.config.endpoint.get_session_token()
        self.security_token: str | None = self.config.endpoint.get_security_token()
        self.transport: Transport = transport or RequestsTransport(self.config.client)

        logger.debug('SoapClient initialized for %r', self.endpoint_url)

    def create_method_call(self, urn: str, method_name: str) -> SoapMethodCall:
        """
        Create a call carrying this client's tokens and transport.

        Args:
            urn: Namespace of the method, e.g. 'xtk:session'.
            method_name: Name of the remote method.
        """
        return SoapMethodCall(
            urn,
            method_name,
            session_token=self.session_token,
            security_token=self.security_token,
            transport=self.transport,
        )

    def execute(self, call: SoapMethodCall) -> SoapMethodCall:
        """
        Execute a call against the configured endpoint.

        Returns:
            The same call, ready for its response parameters to be read.

        Raises:
            SoapError: If the response is malformed or is a SOAP Fault.
            Exception: Whatever the transport raises, unchanged.
        """
        try:
            call.execute(self.endpoint_url)
        except Exception as call_error:
            logger.error(
                'SOAP method %r#%r failed: %r', call.urn, call.method_name, call_error
            )
            raise

        return call

    def __repr__(self) -> str:
        return (
            f'SoapClient('
            f'endpoint={self.endpoint_url}, '
            f'authenticated={bool(self.session_token)}'
            f')'
        )
