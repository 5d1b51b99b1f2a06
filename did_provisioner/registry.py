"""DID registry: resolution and local creation of DIDs."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from acapy_agent.core.error import BaseError
from acapy_agent.core.profile import Profile
from acapy_agent.resolver.base import ResolverError
from acapy_agent.resolver.did_resolver import DIDResolver
from aiohttp import ClientError
from pydid import DIDError

from .error import DIDRegistryError, ResolutionError

LOGGER = logging.getLogger(__name__)

RECOVERY_PUBLIC_KEY_OPT = "recoveryPublicKey"
UPDATE_PUBLIC_KEY_OPT = "updatePublicKey"


class BaseDIDMethodDriver(ABC):
    """Creates DIDs of a single method, e.g. by anchoring them on a ledger."""

    method: str

    @abstractmethod
    async def create(self, profile: Profile, document: dict, options: dict) -> dict:
        """Create a DID from a template document and return the final document."""
        raise NotImplementedError("Subclasses must implement this method")


class DIDMethodDrivers:
    """Registry of DID method drivers, keyed by method name."""

    def __init__(self):
        """Initialize the registry."""
        self._drivers: Dict[str, BaseDIDMethodDriver] = {}

    def register(self, driver: BaseDIDMethodDriver):
        """Register a driver for its method."""
        LOGGER.debug("Registering DID method driver for %s", driver.method)
        self._drivers[driver.method] = driver

    def get(self, method: str) -> Optional[BaseDIDMethodDriver]:
        """Return the driver for a method, if any."""
        return self._drivers.get(method)

    @property
    def methods(self):
        """Methods with a registered driver."""
        return list(self._drivers)


class BaseDIDRegistry(ABC):
    """Base class for DID registries."""

    @abstractmethod
    async def resolve(self, did: str) -> dict:
        """Resolve a DID to its document."""
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    async def create(self, method: str, document: dict, options: dict) -> dict:
        """Create a DID of the given method and return its document."""
        raise NotImplementedError("Subclasses must implement this method")


class AcapyDIDRegistry(BaseDIDRegistry):
    """DID registry backed by the profile's resolver and method drivers."""

    def __init__(self, profile: Profile, drivers: DIDMethodDrivers):
        """Initialize the registry."""
        self.profile = profile
        self.drivers = drivers

    async def resolve(self, did: str) -> dict:
        """Resolve a DID through the DIDResolver bound to the profile."""
        resolver = self.profile.inject(DIDResolver)
        try:
            return await resolver.resolve(self.profile, did)
        except (ResolverError, DIDError) as err:
            raise ResolutionError(f"Failed to resolve did {did}: {err}") from err

    async def create(self, method: str, document: dict, options: dict) -> dict:
        """Create a DID through the driver registered for method."""
        driver = self.drivers.get(method)
        if not driver:
            raise DIDRegistryError(f"No driver registered for did method: {method}")

        try:
            return await driver.create(self.profile, document, options)
        except DIDRegistryError:
            raise
        except BaseError as err:
            raise DIDRegistryError(f"Failed to create did doc: {err.roll_up}") from err
        except (ClientError, asyncio.TimeoutError, ValueError) as err:
            raise DIDRegistryError(
                f"Failed to create did doc with {method} driver: {err}"
            ) from err
