# soapcall/utils/config_loader.py
"""
YAML configuration for SoapClient, validated with Pydantic.

A config file has three sections. Only 'endpoint' is required:

    endpoint:
      url: https://host/nl/jsp/soaprouter.jsp
      session_token: ...        # optional
      security_token: ...       # optional
    client:
      request_timeout: [10, 30] # connect, read (seconds)
      verify_ssl: true
    logging:
      console_level: INFO
      file_path: logs/soapcall.log
      file_level: DEBUG

Tokens are held as SecretStr so they never show up in reprs or logs.
"""

import logging
from pathlib import Path
from typing import Any, Literal, cast

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretStr,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

logger: logging.Logger = logging.getLogger(__name__)

LogLevelName = Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
LogLevel = LogLevelName | int

_http_url_adapter: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)

STANDARD_LOG_LEVELS: frozenset[int] = frozenset({10, 20, 30, 40, 50})


def _level_to_int(level: LogLevel) -> int:
    if isinstance(level, int):
        return level
    return cast(int, getattr(logging, level))


# =============================================================================
# Sections
# =============================================================================


class EndpointSection(BaseModel):
    """Where calls are sent, and the tokens that authenticate them."""

    model_config = ConfigDict(extra='forbid')

    url: str = Field(..., description='URL of the SOAP router, sent as written.')
    session_token: SecretStr | None = Field(
        default=None, description='Sent as the __sessiontoken cookie.'
    )
    security_token: SecretStr | None = Field(
        default=None, description='Sent as the X-Security-Token header.'
    )

    @field_validator('url')
    @classmethod
    def check_url(cls, v: str) -> str:
        """Validate as an HTTP(S) URL but keep the text unnormalized."""
        v = v.strip()
        try:
            _http_url_adapter.validate_python(v)
        except ValidationError as e:
            raise ValueError(f'Invalid HTTP URL: {v!r}') from e
        return v

    def get_session_token(self) -> str | None:
        return self.session_token.get_secret_value() if self.session_token else None

    def get_security_token(self) -> str | None:
        return self.security_token.get_secret_value() if self.security_token else None


class ClientSection(BaseModel):
    """HTTP settings of the default requests transport."""

    model_config = ConfigDict(extra='forbid')

    request_timeout: tuple[float, float] = Field(
        default=(10.0, 30.0), description='(connect, read) timeouts in seconds.'
    )
    verify_ssl: bool = Field(default=True, description='Verify TLS certificates.')

    @field_validator('request_timeout')
    @classmethod
    def check_timeouts(cls, v: tuple[float, float]) -> tuple[float, float]:
        connect, read = v
        if connect <= 0 or read <= 0:
            raise ValueError(f'Timeouts must be positive, got {v}')
        if connect > read:
            raise ValueError(
                f'Connect timeout ({connect}s) exceeds read timeout ({read}s)'
            )
        return v


class LoggingSection(BaseModel):
    """
    Package log output.

    Levels are given by name or by their standard numeric value. Setting
    file_path switches logging to that file; file_level then defaults to
    DEBUG. A file_level without a file_path is rejected.
    """

    model_config = ConfigDict(extra='forbid')

    console_level: LogLevel = 'INFO'
    file_path: Path | None = None
    file_level: LogLevel | None = None

    @field_validator('console_level', 'file_level')
    @classmethod
    def check_numeric_level(cls, v: LogLevel | None) -> LogLevel | None:
        if isinstance(v, int) and v not in STANDARD_LOG_LEVELS:
            raise ValueError(
                f'Numeric log level must be one of {sorted(STANDARD_LOG_LEVELS)}, '
                f'got {v}'
            )
        return v

    @model_validator(mode='after')
    def check_file_logging(self) -> 'LoggingSection':
        if self.file_path is None:
            if self.file_level is not None:
                raise ValueError('file_level requires file_path')
        elif self.file_level is None:
            self.file_level = 'DEBUG'
        return self

    def get_console_level_int(self) -> int:
        return _level_to_int(self.console_level)

    def get_file_level_int(self) -> int | None:
        """Numeric file level, or None when file logging is off."""
        if self.file_level is None:
            return None
        return _level_to_int(self.file_level)


class SoapCallConfig(BaseModel):
    """
    Root configuration model.

    Usage:
        config = load_config('config.yaml')
        url = config.endpoint.url
        timeout = config.client.request_timeout
    """

    model_config = ConfigDict(extra='forbid')

    endpoint: EndpointSection
    client: ClientSection = Field(default_factory=ClientSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)


# =============================================================================
# Loading
# =============================================================================


def _get_default_config_path() -> Path:
    """Return soapcall/config/config.yaml inside the installed package."""
    return Path(__file__).resolve().parent.parent / 'config' / 'config.yaml'


def load_config(config_path: Path | str | None = None) -> SoapCallConfig:
    """
    Read and validate a YAML configuration file.

    Args:
        config_path: Path of the file. Defaults to the package's
                     config/config.yaml.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValidationError: If the content does not match SoapCallConfig.
    """
    path: Path = Path(config_path) if config_path else _get_default_config_path()
    logger.debug('Loading configuration from %s', path)

    if not path.exists():
        logger.error('Configuration file not found: %s', path)
        raise FileNotFoundError(f'Configuration file not found at: {path}')

    try:
        raw_config: dict[str, Any] | None = yaml.safe_load(
            path.read_text(encoding='utf-8')
        )
    except yaml.YAMLError as e:
        logger.error('Invalid YAML in %s: %s', path, e)
        raise

    try:
        return SoapCallConfig.model_validate(raw_config or {})
    except ValidationError as e:
        logger.error('Invalid configuration in %s: %s', path, e)
        raise
