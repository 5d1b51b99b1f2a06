"""Key manager base class."""

from abc import ABC, abstractmethod

from acapy_agent.wallet.key_type import KeyType


class BaseKeyManager(ABC):
    """Base class for key managers.

    Implementations must be safe for concurrent use and raise
    KeyManagerError on backend failures. Key ids they issue are opaque
    strings usable as DID URL fragments.
    """

    @abstractmethod
    async def create(self, key_type: KeyType) -> str:
        """Create a key pair and return its key id."""
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    async def export_public_key(self, kid: str) -> bytes:
        """Return the raw public key bytes for a key id."""
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    async def import_private_key(
        self, private_key: bytes, key_type: KeyType, kid: str
    ) -> str:
        """Store a private key under an explicit key id and return the id."""
        raise NotImplementedError("Subclasses must implement this method")
