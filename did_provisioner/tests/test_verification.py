from unittest.mock import AsyncMock, MagicMock

import pytest
from acapy_agent.wallet.util import b64_to_bytes

from did_provisioner.error import UnsupportedKeyCombination
from did_provisioner.keys.provisioner import KeyProvisioner
from did_provisioner.verification import (
    ED25519_KEY_TYPE,
    ED25519_SIGNATURE_2018,
    ED25519_VERIFICATION_KEY_2018,
    JSON_WEB_SIGNATURE_2020,
    JWS_VERIFICATION_KEY_2020,
    P256_KEY_TYPE,
    SIGNATURE_KEY_TYPES,
    VerificationMethodBuilder,
    find_key_slot,
    select_key,
)

KEY_IDS = ("key-1", "key-2", "key-3")

SUPPORTED = [
    (ED25519_KEY_TYPE, ED25519_SIGNATURE_2018, 0),
    (ED25519_KEY_TYPE, JSON_WEB_SIGNATURE_2020, 1),
    (P256_KEY_TYPE, JSON_WEB_SIGNATURE_2020, 2),
]


@pytest.mark.parametrize("key_type, signature_type, index", SUPPORTED)
def test_select_key(key_type, signature_type, index):
    assert select_key(key_type, signature_type, KEY_IDS) == KEY_IDS[index]
    # Pure: same inputs give the same key
    assert select_key(key_type, signature_type, KEY_IDS) == KEY_IDS[index]


@pytest.mark.parametrize(
    "key_type, signature_type",
    [
        (P256_KEY_TYPE, ED25519_SIGNATURE_2018),
        (ED25519_KEY_TYPE, "BbsBlsSignature2020"),
        ("BLS12381G2", JSON_WEB_SIGNATURE_2020),
        ("", ""),
    ],
)
def test_select_key_unsupported(key_type, signature_type):
    with pytest.raises(UnsupportedKeyCombination):
        select_key(key_type, signature_type, KEY_IDS)


def test_select_key_requires_three_ids():
    with pytest.raises(ValueError):
        select_key(ED25519_KEY_TYPE, ED25519_SIGNATURE_2018, KEY_IDS[:2])


def test_find_key_slot_custom_table():
    table = {"CustomSignature": JWS_VERIFICATION_KEY_2020}

    assert find_key_slot(P256_KEY_TYPE, "CustomSignature", table) == 2
    with pytest.raises(UnsupportedKeyCombination):
        find_key_slot(ED25519_KEY_TYPE, ED25519_SIGNATURE_2018, table)


def test_signature_key_types_read_only():
    with pytest.raises(TypeError):
        SIGNATURE_KEY_TYPES["Other"] = "Other"


@pytest.mark.asyncio
async def test_build(key_provisioner):
    builder = VerificationMethodBuilder(key_provisioner)

    bundle = await builder.build(ED25519_KEY_TYPE, ED25519_SIGNATURE_2018)

    methods = bundle.document["verificationMethod"]
    assert [vm["type"] for vm in methods] == [
        ED25519_VERIFICATION_KEY_2018,
        JWS_VERIFICATION_KEY_2020,
        JWS_VERIFICATION_KEY_2020,
    ]
    assert [vm["id"] for vm in methods] == list(bundle.key_ids)
    assert len(set(bundle.key_ids)) == 3
    assert bundle.document["authentication"] == list(bundle.key_ids)
    assert bundle.document["assertionMethod"] == list(bundle.key_ids)

    assert methods[0]["publicKeyJwk"]["crv"] == "Ed25519"
    assert methods[1]["publicKeyJwk"]["crv"] == "Ed25519"
    assert methods[2]["publicKeyJwk"]["crv"] == "P-256"

    assert bundle.selected_key_id == bundle.key_ids[0]


@pytest.mark.asyncio
async def test_build_descriptors(key_provisioner, key_manager):
    builder = VerificationMethodBuilder(key_provisioner)

    bundle = await builder.build(P256_KEY_TYPE, JSON_WEB_SIGNATURE_2020)

    assert [pk.keyType for pk in bundle.public_keys] == [
        ED25519_KEY_TYPE,
        ED25519_KEY_TYPE,
        P256_KEY_TYPE,
    ]
    for descriptor, kid in zip(bundle.public_keys, bundle.key_ids):
        assert descriptor.id == kid
        assert descriptor.purposes == ["assertionMethod", "authentication"]
        assert descriptor.recovery is None
        assert descriptor.update is None

    for descriptor, kid in zip(bundle.public_keys[:2], bundle.key_ids[:2]):
        assert b64_to_bytes(descriptor.value) == await key_manager.export_public_key(
            kid
        )

    # P-256 goes out as the uncompressed point matching the JWK coordinates
    p256_value = b64_to_bytes(bundle.public_keys[2].value)
    jwk = bundle.document["verificationMethod"][2]["publicKeyJwk"]
    assert len(p256_value) == 65
    assert p256_value[0] == 0x04
    assert p256_value[1:33] == b64_to_bytes(jwk["x"], urlsafe=True)
    assert p256_value[33:] == b64_to_bytes(jwk["y"], urlsafe=True)

    assert bundle.selected_key_id == bundle.key_ids[2]


@pytest.mark.asyncio
@pytest.mark.parametrize("key_type, signature_type, index", SUPPORTED)
async def test_build_selects_slot_with_fresh_keys(
    key_provisioner, key_type, signature_type, index
):
    builder = VerificationMethodBuilder(key_provisioner)

    first = await builder.build(key_type, signature_type)
    second = await builder.build(key_type, signature_type)

    assert first.selected_key_id == first.key_ids[index]
    assert second.selected_key_id == second.key_ids[index]
    assert first.selected_key_id != second.selected_key_id


@pytest.mark.asyncio
async def test_build_unsupported_creates_no_keys():
    key_provisioner = MagicMock(KeyProvisioner)
    key_provisioner.create_key = AsyncMock()
    builder = VerificationMethodBuilder(key_provisioner)

    with pytest.raises(UnsupportedKeyCombination):
        await builder.build(P256_KEY_TYPE, ED25519_SIGNATURE_2018)

    key_provisioner.create_key.assert_not_awaited()
