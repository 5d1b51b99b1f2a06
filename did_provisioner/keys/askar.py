"""Askar backed key manager."""

import logging

from acapy_agent.core.profile import Profile
from acapy_agent.wallet.key_type import ED25519, KeyType
from aries_askar import AskarError, Key, KeyAlg

from ..error import KeyManagerError
from .base import BaseKeyManager

LOGGER = logging.getLogger(__name__)

ED25519_SEED_SIZE = 32


class AskarKeyManager(BaseKeyManager):
    """Key manager storing keys in the profile's Askar store."""

    def __init__(self, profile: Profile):
        """Initialize the key manager."""
        self.profile = profile

    async def create(self, key_type: KeyType) -> str:
        """Generate a key and store it under its JWK thumbprint."""
        try:
            key = Key.generate(KeyAlg(key_type.key_type))
            kid = key.get_jwk_thumbprint()
            async with self.profile.session() as session:
                await session.handle.insert_key(kid, key)
        except (AskarError, ValueError) as err:
            raise KeyManagerError(
                f"Unable to create {key_type.key_type} key: {err}"
            ) from err

        LOGGER.debug("Created %s key %s", key_type.key_type, kid)
        return kid

    async def export_public_key(self, kid: str) -> bytes:
        """Return the public key bytes of a stored key."""
        try:
            async with self.profile.session() as session:
                entry = await session.handle.fetch_key(kid)
        except AskarError as err:
            raise KeyManagerError(f"Unable to fetch key {kid}: {err}") from err

        if not entry:
            raise KeyManagerError(f"Key not found: {kid}")

        return entry.key.get_public_bytes()

    async def import_private_key(
        self, private_key: bytes, key_type: KeyType, kid: str
    ) -> str:
        """Store a private key under kid.

        Ed25519 keys are accepted either as the 32 byte seed or as the 64
        byte seed and public key concatenation.
        """
        secret = private_key
        if key_type == ED25519:
            if len(secret) not in (ED25519_SEED_SIZE, 2 * ED25519_SEED_SIZE):
                raise KeyManagerError(
                    f"Invalid ed25519 private key length: {len(secret)}"
                )
            secret = secret[:ED25519_SEED_SIZE]

        try:
            key = Key.from_secret_bytes(KeyAlg(key_type.key_type), secret)
            async with self.profile.session() as session:
                existing = await session.handle.fetch_key(kid)
                if existing:
                    # Re-importing the same key under the same id is a no-op
                    if existing.key.get_public_bytes() == key.get_public_bytes():
                        return kid
                    raise KeyManagerError(
                        f"A different key is already stored as {kid}"
                    )
                await session.handle.insert_key(kid, key)
        except (AskarError, ValueError) as err:
            raise KeyManagerError(f"Unable to import key {kid}: {err}") from err

        LOGGER.debug("Imported %s key %s", key_type.key_type, kid)
        return kid
