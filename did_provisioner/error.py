"""DID provisioner errors."""

from acapy_agent.core.error import BaseError


class DIDProvisionerError(BaseError):
    """Base class for DID provisioner errors."""


class DIDProvisionerInputError(DIDProvisionerError):
    """Raised when a creation request cannot be satisfied as given."""


class UnsupportedKeyCombination(DIDProvisionerInputError):
    """Requested key type and signature type do not match a prebuilt key."""


class UnsupportedImportAlgorithm(DIDProvisionerInputError):
    """Private key import requested for a key type other than Ed25519."""


class KeyManagerError(DIDProvisionerError):
    """Key manager backend failure."""


class KeyGenerationError(KeyManagerError):
    """Key pair could not be created."""


class KeyExportError(KeyGenerationError):
    """Public key bytes could not be exported for a created key."""


class KeyImportError(KeyManagerError):
    """Private key could not be imported."""


class ResolutionError(DIDProvisionerError):
    """Existing DID could not be resolved."""


class DIDRegistryError(DIDProvisionerError):
    """Local DID registry could not create the DID."""


class RegistrarCreationError(DIDProvisionerError):
    """Universal registrar call failed or returned malformed data."""


class RegistrarResponseError(RegistrarCreationError):
    """Expected key missing from the registrar response."""


class SelectedKeyNotFound(RegistrarResponseError):
    """Selected key was not returned by the registrar."""


class NoKeyForPurpose(RegistrarResponseError):
    """No returned key carries the requested purpose."""
