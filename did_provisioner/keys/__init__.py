"""Key management."""

from .askar import AskarKeyManager
from .base import BaseKeyManager
from .provisioner import KeyProvisioner

__all__ = ["AskarKeyManager", "BaseKeyManager", "KeyProvisioner"]
