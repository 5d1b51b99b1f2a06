"""DID provisioning for credential issuers."""

import logging
from enum import Enum
from typing import Mapping, Optional, Tuple

from acapy_agent.core.profile import Profile
from acapy_agent.wallet.key_type import ED25519
from acapy_agent.wallet.util import b58_to_bytes

from .config import DEFAULT_DID_METHOD, Config
from .domain import replace_canonical_did_with_domain_did
from .error import DIDRegistryError, KeyImportError, ResolutionError
from .keys.askar import AskarKeyManager
from .keys.base import BaseKeyManager
from .keys.provisioner import KeyProvisioner
from .models import DIDCreationRequest, DIDCreationResult
from .registrar.adapter import UniversalRegistrarAdapter
from .registrar.client import UniversalRegistrarClient
from .registry import (
    RECOVERY_PUBLIC_KEY_OPT,
    UPDATE_PUBLIC_KEY_OPT,
    AcapyDIDRegistry,
    BaseDIDRegistry,
    DIDMethodDrivers,
)
from .verification import SIGNATURE_KEY_TYPES, VerificationMethodBuilder, find_key_slot

LOGGER = logging.getLogger(__name__)


class CreationStrategy(Enum):
    """How a DID is provisioned."""

    REGISTRAR = "registrar"
    CREATE = "create"
    ADOPT = "adopt"


class DIDProvisioner:
    """Provision the DID and signing key used to issue credentials."""

    def __init__(
        self,
        key_manager: BaseKeyManager,
        registry: BaseDIDRegistry,
        registrar_client: UniversalRegistrarClient,
        domain: str = "",
        did_method: str = DEFAULT_DID_METHOD,
        signature_key_types: Mapping[str, str] = SIGNATURE_KEY_TYPES,
    ):
        """Initialize the provisioner."""
        self.key_provisioner = KeyProvisioner(key_manager)
        self.builder = VerificationMethodBuilder(
            self.key_provisioner, signature_key_types
        )
        self.registry = registry
        self.registrar_adapter = UniversalRegistrarAdapter(
            self.key_provisioner, self.builder, registrar_client
        )
        self.domain = domain
        self.did_method = did_method

    @classmethod
    def from_profile(cls, profile: Profile) -> "DIDProvisioner":
        """Assemble a provisioner from the profile's wallet and configuration."""
        config = profile.inject_or(Config) or Config.from_settings(profile.settings)
        drivers = profile.inject_or(DIDMethodDrivers) or DIDMethodDrivers()
        return cls(
            AskarKeyManager(profile),
            AcapyDIDRegistry(profile, drivers),
            UniversalRegistrarClient(config.ssl_context(), config.registrar_timeout),
            domain=config.domain,
            did_method=config.did_method,
        )

    @staticmethod
    def strategy_for(request: DIDCreationRequest) -> CreationStrategy:
        """Determine the creation strategy for a request."""
        if request.registrar and request.registrar.driver_url:
            return CreationStrategy.REGISTRAR
        if not request.did:
            return CreationStrategy.CREATE
        return CreationStrategy.ADOPT

    async def create_did(self, request: DIDCreationRequest) -> DIDCreationResult:
        """Create or adopt a DID.

        Returns:
            The DID and the fragment qualified id of the key to sign with
        """
        find_key_slot(
            request.key_type, request.signature_type, self.builder.signature_key_types
        )

        strategy = self.strategy_for(request)
        LOGGER.info("Provisioning DID using %s strategy", strategy.value)

        if strategy == CreationStrategy.REGISTRAR:
            did, public_key_id = await self.registrar_adapter.create_did(
                request.key_type,
                request.signature_type,
                request.purpose,
                request.registrar,
            )
        elif strategy == CreationStrategy.CREATE:
            did, public_key_id = await self._create_did(
                request.key_type, request.signature_type
            )
        else:
            did, public_key_id = await self._adopt_did(
                request.did, request.private_key, request.key_id
            )

        did, public_key_id = replace_canonical_did_with_domain_did(
            did, public_key_id, self.domain
        )
        LOGGER.info("Provisioned DID %s", did)

        return DIDCreationResult(did=did, public_key_id=public_key_id)

    async def _create_did(self, key_type: str, signature_type: str) -> Tuple[str, str]:
        bundle = await self.builder.build(key_type, signature_type)

        _, recovery_public_key = await self.key_provisioner.create_key(ED25519)
        _, update_public_key = await self.key_provisioner.create_key(ED25519)

        document = await self.registry.create(
            self.did_method,
            bundle.document,
            {
                RECOVERY_PUBLIC_KEY_OPT: recovery_public_key,
                UPDATE_PUBLIC_KEY_OPT: update_public_key,
            },
        )
        did = document.get("id") if document else None
        if not did:
            raise DIDRegistryError("Created did doc has no id")

        return did, f"{did}#{bundle.selected_key_id}"

    async def _adopt_did(
        self, did: str, private_key: Optional[str], key_id: Optional[str]
    ) -> Tuple[str, str]:
        document = await self.registry.resolve(did)
        resolved_did = document.get("id") if document else None
        if not resolved_did:
            raise ResolutionError(f"Resolved document for {did} has no id")

        # The key id is trusted as given; it is not matched against the document
        if private_key:
            if not key_id:
                raise KeyImportError("A key id is required to import a private key")
            try:
                private_key_bytes = b58_to_bytes(private_key)
            except ValueError as err:
                raise KeyImportError(
                    f"Private key for {key_id} is not valid base58"
                ) from err
            await self.key_provisioner.import_private_key(
                key_id, ED25519, private_key_bytes
            )

        return resolved_did, key_id or ""
