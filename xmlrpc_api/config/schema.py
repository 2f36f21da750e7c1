"""Configuration schema using Pydantic.

Persisted to ~/.xmlrpc_api/config.json; every field can also be set from the
environment, e.g. ``XMLRPC_API_CLIENT__TIMEOUT=5``.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class ClientConfig(BaseModel):
    """Outbound XML-RPC client settings."""
    url: str = "http://127.0.0.1:8080/RPC2"
    timeout: float = 20.0  # Seconds, handed to httpx as-is


class ServerConfig(BaseModel):
    """Inbound HTTP endpoint settings."""
    host: str = "127.0.0.1"
    port: int = 8080
    path: str = "/RPC2"


class CodecConfig(BaseModel):
    """Document building settings."""
    indent: int = Field(default=0, ge=0)  # 0 produces canonical single-line XML


class DispatchConfig(BaseModel):
    """Dispatcher error-boundary settings."""
    include_traceback: bool = False  # Append the traceback to catch-all (code 0) fault strings
    redact_fault_strings: bool = False  # Strip tokens/keys from catch-all fault strings


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: str | None = None  # Rotating log file; stderr only when unset


class Config(BaseSettings):
    """Root configuration for xmlrpc_api."""
    client: ClientConfig = Field(default_factory=ClientConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    codec: CodecConfig = Field(default_factory=CodecConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(
        env_prefix="XMLRPC_API_",
        env_nested_delimiter="__",
    )
