"""DID provisioner plugin."""

import logging

from acapy_agent.config.injection_context import InjectionContext
from acapy_agent.wallet.key_type import P256, KeyTypes

from .config import Config
from .models import DIDCreationRequest, DIDCreationResult, UniRegistrar
from .provisioner import CreationStrategy, DIDProvisioner
from .registry import BaseDIDMethodDriver, DIDMethodDrivers

LOGGER = logging.getLogger(__name__)

__all__ = [
    "BaseDIDMethodDriver",
    "CreationStrategy",
    "DIDCreationRequest",
    "DIDCreationResult",
    "DIDMethodDrivers",
    "DIDProvisioner",
    "UniRegistrar",
    "setup",
]


async def setup(context: InjectionContext):
    """Setup the plugin."""
    LOGGER.info("< did_provisioner plugin setup...")

    try:
        config = Config.from_settings(context.settings)
    except Exception:
        LOGGER.exception("Invalid did_provisioner configuration")
        raise
    context.injector.bind_instance(Config, config)

    key_types = context.inject(KeyTypes)
    key_types.register(P256)

    if not context.inject_or(DIDMethodDrivers):
        context.injector.bind_instance(DIDMethodDrivers, DIDMethodDrivers())

    LOGGER.info(
        "< did_provisioner plugin setup; did method %s, domain %s",
        config.did_method,
        config.domain or "(none)",
    )
