"""Delegate DID creation to a universal registrar."""

import logging
from typing import List, Optional, Tuple

from acapy_agent.wallet.key_type import ED25519
from acapy_agent.wallet.util import bytes_to_b64

from ..keys.provisioner import KeyProvisioner
from ..models import PublicKeyDescriptor, UniRegistrar
from ..verification import ED25519_KEY_TYPE, VerificationMethodBuilder
from .client import UniversalRegistrarClient
from .vendors import vendor_for

LOGGER = logging.getLogger(__name__)


def control_key_descriptors(
    recovery_public_key: bytes, update_public_key: bytes
) -> List[PublicKeyDescriptor]:
    """Describe the recovery and update keys for a registrar."""
    return [
        PublicKeyDescriptor(
            keyType=ED25519_KEY_TYPE,
            value=bytes_to_b64(recovery_public_key),
            recovery=True,
        ),
        PublicKeyDescriptor(
            keyType=ED25519_KEY_TYPE,
            value=bytes_to_b64(update_public_key),
            update=True,
        ),
    ]


class UniversalRegistrarAdapter:
    """Create DIDs through a universal registrar driver."""

    def __init__(
        self,
        key_provisioner: KeyProvisioner,
        builder: VerificationMethodBuilder,
        client: UniversalRegistrarClient,
    ):
        """Initialize the adapter."""
        self.key_provisioner = key_provisioner
        self.builder = builder
        self.client = client

    async def create_did(
        self,
        key_type: str,
        signature_type: str,
        purpose: Optional[str],
        registrar: UniRegistrar,
    ) -> Tuple[str, str]:
        """Create a DID through registrar.driver_url.

        Returns:
            The DID and the id of the key to sign with
        """
        bundle = await self.builder.build(key_type, signature_type)

        _, recovery_public_key = await self.key_provisioner.create_key(ED25519)
        _, update_public_key = await self.key_provisioner.create_key(ED25519)

        public_keys = [
            *bundle.public_keys,
            *control_key_descriptors(recovery_public_key, update_public_key),
        ]

        identifier, keys = await self.client.create_did(
            registrar.driver_url, public_keys, registrar.options
        )
        LOGGER.debug(
            "uni-registrar %s created %s with %d keys",
            registrar.driver_url,
            identifier,
            len(keys),
        )

        vendor = vendor_for(identifier, self.key_provisioner)
        public_key_id = await vendor.normalize(keys, bundle.selected_key_id, purpose)

        return identifier, public_key_id
