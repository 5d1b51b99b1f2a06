"""Retrieve configuration values."""

import ssl
from dataclasses import dataclass
from os import getenv
from typing import Optional

from acapy_agent.config.base import BaseSettings
from acapy_agent.config.settings import Settings

DEFAULT_DID_METHOD = "trustbloc"


class ConfigError(ValueError):
    """Base class for configuration errors."""

    def __init__(self, var: str, env: str):
        """Initialize a ConfigError."""
        super().__init__(
            f"Invalid {var} specified for DID provisioner; use either "
            f"did_provisioner.{var} plugin config value or environment variable {env}"
        )


def _as_bool(value) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return None


@dataclass
class Config:
    """Configuration for the DID provisioner plugin."""

    domain: str = ""
    did_method: str = DEFAULT_DID_METHOD
    registrar_ca_file: Optional[str] = None
    registrar_tls_verify: bool = True
    registrar_timeout: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: BaseSettings) -> "Config":
        """Retrieve configuration from context."""
        assert isinstance(settings, Settings)
        plugin_settings = settings.for_plugin("did_provisioner")

        domain = plugin_settings.get("domain") or getenv("DID_PROVISIONER_DOMAIN", "")
        did_method = (
            plugin_settings.get("did_method")
            or getenv("DID_PROVISIONER_DID_METHOD")
            or DEFAULT_DID_METHOD
        )
        registrar_ca_file = plugin_settings.get("registrar_ca_file") or getenv(
            "DID_PROVISIONER_REGISTRAR_CA_FILE"
        )

        tls_verify = plugin_settings.get("registrar_tls_verify")
        if tls_verify is None:
            tls_verify = getenv("DID_PROVISIONER_REGISTRAR_TLS_VERIFY", "true")
        registrar_tls_verify = _as_bool(tls_verify)
        if registrar_tls_verify is None:
            raise ConfigError(
                "registrar_tls_verify", "DID_PROVISIONER_REGISTRAR_TLS_VERIFY"
            )

        timeout = plugin_settings.get("registrar_timeout") or getenv(
            "DID_PROVISIONER_REGISTRAR_TIMEOUT"
        )
        registrar_timeout = None
        if timeout:
            try:
                registrar_timeout = float(timeout)
            except ValueError:
                raise ConfigError(
                    "registrar_timeout", "DID_PROVISIONER_REGISTRAR_TIMEOUT"
                )
            if registrar_timeout <= 0:
                raise ConfigError(
                    "registrar_timeout", "DID_PROVISIONER_REGISTRAR_TIMEOUT"
                )

        return cls(
            domain,
            did_method,
            registrar_ca_file,
            registrar_tls_verify,
            registrar_timeout,
        )

    def ssl_context(self) -> Optional[ssl.SSLContext]:
        """Build the TLS context used for universal registrar calls.

        Returns None when the default aiohttp verification applies.
        """
        if self.registrar_ca_file:
            context = ssl.create_default_context(cafile=self.registrar_ca_file)
        elif not self.registrar_tls_verify:
            context = ssl.create_default_context()
        else:
            return None

        if not self.registrar_tls_verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context
