"""Key provisioning on top of a key manager."""

import logging
from typing import Tuple

from acapy_agent.wallet.key_type import ED25519, KeyType

from ..error import (
    KeyExportError,
    KeyGenerationError,
    KeyImportError,
    KeyManagerError,
    UnsupportedImportAlgorithm,
)
from .base import BaseKeyManager

LOGGER = logging.getLogger(__name__)


class KeyProvisioner:
    """Create and import keys through a key manager."""

    def __init__(self, key_manager: BaseKeyManager):
        """Initialize the key provisioner."""
        self.key_manager = key_manager

    async def create_key(self, key_type: KeyType) -> Tuple[str, bytes]:
        """Create a key pair and export its public key.

        A key created before a failed export is left in the key manager.

        Returns:
            The key id and the raw public key bytes
        """
        try:
            kid = await self.key_manager.create(key_type)
        except KeyManagerError as err:
            raise KeyGenerationError(
                f"Failed to create {key_type.key_type} key: {err.roll_up}"
            ) from err

        try:
            public_key = await self.key_manager.export_public_key(kid)
        except KeyManagerError as err:
            raise KeyExportError(
                f"Failed to export public key {kid}: {err.roll_up}"
            ) from err

        return kid, public_key

    async def import_private_key(
        self, key_id: str, key_type: KeyType, private_key: bytes
    ) -> str:
        """Import a private key, pinned to the fragment of key_id.

        Args:
            key_id: Fragment qualified key id, e.g. did:example:123#key-1
            key_type: Type of the private key; only Ed25519 is supported
            private_key: Raw private key bytes

        Returns:
            The key id assigned by the key manager
        """
        if key_type.key_type != ED25519.key_type:
            raise UnsupportedImportAlgorithm(
                f"Import key type not supported: {key_type.key_type}"
            )

        _, sep, fragment = key_id.partition("#")
        if not sep or not fragment:
            raise KeyImportError(f"Key id must contain a fragment: {key_id}")

        try:
            kid = await self.key_manager.import_private_key(
                private_key, key_type, fragment
            )
        except KeyManagerError as err:
            raise KeyImportError(
                f"Failed to import private key {key_id}: {err.roll_up}"
            ) from err

        LOGGER.debug("Imported private key for %s", key_id)
        return kid
