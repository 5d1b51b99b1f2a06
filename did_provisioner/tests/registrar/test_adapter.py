import pytest
from acapy_agent.wallet.util import b64_to_bytes

from did_provisioner.error import SelectedKeyNotFound, UnsupportedKeyCombination
from did_provisioner.models import UniRegistrar
from did_provisioner.registrar.adapter import UniversalRegistrarAdapter
from did_provisioner.registrar.models import RegistrarKey
from did_provisioner.verification import (
    ED25519_KEY_TYPE,
    JSON_WEB_SIGNATURE_2020,
    P256_KEY_TYPE,
    ED25519_SIGNATURE_2018,
    VerificationMethodBuilder,
)

DRIVER_URL = "https://uni-registrar.example.com/1.0/register?driverId=driver-trustbloc"


def echo_keys(identifier):
    """Registrar stub returning every sent verification key under identifier."""

    async def create_did(driver_url, public_keys, options=None):
        return identifier, [
            RegistrarKey(id=f"{identifier}#{pk.id}", purposes=pk.purposes or [])
            for pk in public_keys
            if pk.id
        ]

    return create_did


@pytest.fixture
def adapter(key_provisioner, mock_registrar_client):
    return UniversalRegistrarAdapter(
        key_provisioner,
        VerificationMethodBuilder(key_provisioner),
        mock_registrar_client,
    )


@pytest.fixture
def registrar():
    return UniRegistrar(driverURL=DRIVER_URL, options={"network": "testnet"})


@pytest.mark.asyncio
async def test_create_did_options(adapter, mock_registrar_client, registrar, canonical_did):
    mock_registrar_client.create_did.side_effect = echo_keys(canonical_did)

    did, public_key_id = await adapter.create_did(
        P256_KEY_TYPE, JSON_WEB_SIGNATURE_2020, None, registrar
    )

    driver_url, public_keys, options = mock_registrar_client.create_did.call_args.args
    assert driver_url == DRIVER_URL
    assert options == {"network": "testnet"}
    assert len(public_keys) == 5

    verification_keys, (recovery, update) = public_keys[:3], public_keys[3:]
    assert all(pk.id and not pk.recovery and not pk.update for pk in verification_keys)
    assert recovery.recovery is True and recovery.id is None
    assert update.update is True and update.id is None
    assert recovery.keyType == update.keyType == ED25519_KEY_TYPE
    assert len(b64_to_bytes(recovery.value)) == 32
    assert recovery.value != update.value

    assert did == canonical_did
    assert public_key_id == f"{canonical_did}#{verification_keys[2].id}"


@pytest.mark.asyncio
async def test_create_did_selected_key_missing(
    adapter, mock_registrar_client, registrar, canonical_did
):
    mock_registrar_client.create_did.return_value = (
        canonical_did,
        [RegistrarKey(id=f"{canonical_did}#unknown")],
    )

    with pytest.raises(SelectedKeyNotFound):
        await adapter.create_did(
            ED25519_KEY_TYPE, ED25519_SIGNATURE_2018, None, registrar
        )


@pytest.mark.asyncio
async def test_create_did_unsupported(adapter, mock_registrar_client, registrar):
    with pytest.raises(UnsupportedKeyCombination):
        await adapter.create_did(P256_KEY_TYPE, ED25519_SIGNATURE_2018, None, registrar)

    mock_registrar_client.create_did.assert_not_awaited()
