"""Verification method construction and signing key selection."""

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from acapy_agent.wallet.key_type import ED25519, P256, KeyType
from acapy_agent.wallet.util import b64_to_bytes, bytes_to_b64
from aries_askar import Key, KeyAlg

from .error import UnsupportedKeyCombination
from .keys.provisioner import KeyProvisioner
from .models import (
    KEY_PURPOSE_ASSERTION_METHOD,
    KEY_PURPOSE_AUTHENTICATION,
    PublicKeyDescriptor,
)

LOGGER = logging.getLogger(__name__)

ED25519_KEY_TYPE = "Ed25519"
P256_KEY_TYPE = "P256"

ED25519_SIGNATURE_2018 = "Ed25519Signature2018"
JSON_WEB_SIGNATURE_2020 = "JsonWebSignature2020"

ED25519_VERIFICATION_KEY_2018 = "Ed25519VerificationKey2018"
JWS_VERIFICATION_KEY_2020 = "JwsVerificationKey2020"

SIGNATURE_KEY_TYPES: Mapping[str, str] = MappingProxyType(
    {
        ED25519_SIGNATURE_2018: ED25519_VERIFICATION_KEY_2018,
        JSON_WEB_SIGNATURE_2020: JWS_VERIFICATION_KEY_2020,
    }
)

KEY_PURPOSES = (KEY_PURPOSE_ASSERTION_METHOD, KEY_PURPOSE_AUTHENTICATION)


@dataclass(frozen=True)
class KeySlot:
    """One of the prebuilt (key type, verification method type) pairs."""

    key_type: str
    wallet_key_type: KeyType
    verification_method_type: str


# Order matters: keys are created and selected by position.
KEY_SLOTS: Tuple[KeySlot, ...] = (
    KeySlot(ED25519_KEY_TYPE, ED25519, ED25519_VERIFICATION_KEY_2018),
    KeySlot(ED25519_KEY_TYPE, ED25519, JWS_VERIFICATION_KEY_2020),
    KeySlot(P256_KEY_TYPE, P256, JWS_VERIFICATION_KEY_2020),
)


def find_key_slot(
    key_type: str,
    signature_type: str,
    signature_key_types: Mapping[str, str] = SIGNATURE_KEY_TYPES,
) -> int:
    """Return the position of the prebuilt key matching the request."""
    verification_method_type = signature_key_types.get(signature_type)
    for index, slot in enumerate(KEY_SLOTS):
        if (
            slot.key_type == key_type
            and slot.verification_method_type == verification_method_type
        ):
            return index

    raise UnsupportedKeyCombination(
        f"No key found to match key type: {key_type} "
        f"and signature type: {signature_type}"
    )


def select_key(
    key_type: str,
    signature_type: str,
    key_ids: Sequence[str],
    signature_key_types: Mapping[str, str] = SIGNATURE_KEY_TYPES,
) -> str:
    """Pick the signing key among the prebuilt key ids."""
    if len(key_ids) != len(KEY_SLOTS):
        raise ValueError(f"Expected {len(KEY_SLOTS)} key ids, got {len(key_ids)}")

    return key_ids[find_key_slot(key_type, signature_type, signature_key_types)]


def public_key_jwk(key_type: KeyType, public_key: bytes) -> dict:
    """Express raw public key bytes as a JWK."""
    key = Key.from_public_bytes(KeyAlg(key_type.key_type), public_key)
    return json.loads(key.get_jwk_public())


def descriptor_value(key_type: KeyType, public_key: bytes, jwk: dict) -> str:
    """Encode a public key for a registrar descriptor.

    P-256 keys are sent as the uncompressed SEC1 point (0x04 || X || Y).
    """
    if key_type is P256:
        x = b64_to_bytes(jwk["x"], urlsafe=True)
        y = b64_to_bytes(jwk["y"], urlsafe=True)
        public_key = b"\x04" + x + y
    return bytes_to_b64(public_key)


@dataclass
class VerificationMethodBundle:
    """Template DID document and registrar descriptors for the prebuilt keys."""

    document: dict
    public_keys: List[PublicKeyDescriptor]
    key_ids: Tuple[str, ...]
    selected_key_id: str


class VerificationMethodBuilder:
    """Build the verification methods of a new DID."""

    def __init__(
        self,
        key_provisioner: KeyProvisioner,
        signature_key_types: Mapping[str, str] = SIGNATURE_KEY_TYPES,
    ):
        """Initialize the builder."""
        self.key_provisioner = key_provisioner
        self.signature_key_types = MappingProxyType(dict(signature_key_types))

    async def build(self, key_type: str, signature_type: str) -> VerificationMethodBundle:
        """Create one key per slot and select the signing key.

        The combination is checked before any key is created.
        """
        find_key_slot(key_type, signature_type, self.signature_key_types)

        document = {"verificationMethod": [], "authentication": [], "assertionMethod": []}
        public_keys = []
        key_ids = []

        for slot in KEY_SLOTS:
            kid, public_key = await self.key_provisioner.create_key(slot.wallet_key_type)
            jwk = public_key_jwk(slot.wallet_key_type, public_key)
            verification_method = {
                "id": kid,
                "type": slot.verification_method_type,
                "publicKeyJwk": jwk,
            }
            document["verificationMethod"].append(verification_method)
            document["authentication"].append(kid)
            document["assertionMethod"].append(kid)

            public_keys.append(
                PublicKeyDescriptor(
                    id=kid,
                    type=slot.verification_method_type,
                    keyType=slot.key_type,
                    value=descriptor_value(slot.wallet_key_type, public_key, jwk),
                    purposes=list(KEY_PURPOSES),
                )
            )
            key_ids.append(kid)

        selected_key_id = select_key(
            key_type, signature_type, key_ids, self.signature_key_types
        )
        LOGGER.debug(
            "Selected key %s for %s/%s", selected_key_id, key_type, signature_type
        )

        return VerificationMethodBundle(
            document=document,
            public_keys=public_keys,
            key_ids=tuple(key_ids),
            selected_key_id=selected_key_id,
        )
