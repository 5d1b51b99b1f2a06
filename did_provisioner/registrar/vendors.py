"""Per-vendor normalization of universal registrar responses.

Registrars differ in how they report the keys of a created DID. Each vendor
maps the returned keys to the id of the key the caller should sign with,
importing returned private keys where the registrar generated them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from acapy_agent.wallet.key_type import ED25519
from acapy_agent.wallet.util import b58_to_bytes

from ..error import NoKeyForPurpose, RegistrarCreationError, SelectedKeyNotFound
from ..keys.provisioner import KeyProvisioner
from .models import RegistrarKey

LOGGER = logging.getLogger(__name__)


class RegistrarVendor(ABC):
    """Base class for registrar vendors."""

    name: str

    def __init__(self, key_provisioner: KeyProvisioner):
        """Initialize the vendor."""
        self.key_provisioner = key_provisioner

    @abstractmethod
    async def normalize(
        self,
        keys: Sequence[RegistrarKey],
        selected_key_id: str,
        purpose: Optional[str],
    ) -> str:
        """Return the id of the key to sign with."""
        raise NotImplementedError("Subclasses must implement this method")

    async def import_key(self, key: RegistrarKey) -> str:
        """Import the Ed25519 private key returned for key."""
        if not key.privateKeyBase58:
            raise RegistrarCreationError(
                f"{self.name}: registrar returned no private key for {key.id}"
            )
        try:
            private_key = b58_to_bytes(key.privateKeyBase58)
        except ValueError as err:
            raise RegistrarCreationError(
                f"{self.name}: invalid private key returned for {key.id}"
            ) from err

        await self.key_provisioner.import_private_key(key.id, ED25519, private_key)
        LOGGER.debug("%s: imported registrar key %s", self.name, key.id)
        return key.id


class TrustblocVendor(RegistrarVendor):
    """did:trustbloc registrars keep the keys they were sent."""

    name = "trustbloc"

    async def normalize(self, keys, selected_key_id, purpose):
        """Find the selected key among the returned keys."""
        for key in keys:
            if f"#{selected_key_id}" in key.id:
                return key.id

        raise SelectedKeyNotFound(f"Selected key not found {selected_key_id}")


class V1Vendor(RegistrarVendor):
    """did:v1 registrars generate keys per purpose."""

    name = "v1"

    async def normalize(self, keys, selected_key_id, purpose):
        """Import the first key carrying the requested purpose."""
        for key in keys:
            if purpose in key.purposes:
                return await self.import_key(key)

        raise NoKeyForPurpose(f"did:v1 - not able to find key with purpose {purpose}")


class GenericVendor(RegistrarVendor):
    """Registrars without key purpose negotiation."""

    name = "generic"

    async def normalize(self, keys, selected_key_id, purpose):
        """Import the first returned key."""
        if not keys:
            raise RegistrarCreationError("Registrar returned no keys")

        return await self.import_key(keys[0])


VENDORS = (
    ("did:trustbloc", TrustblocVendor),
    ("did:v1", V1Vendor),
)


def vendor_for(identifier: str, key_provisioner: KeyProvisioner) -> RegistrarVendor:
    """Select the vendor matching a registrar assigned DID."""
    for marker, vendor_class in VENDORS:
        if marker in identifier:
            return vendor_class(key_provisioner)

    return GenericVendor(key_provisioner)
