from unittest.mock import AsyncMock, MagicMock

import pytest
from acapy_agent.config.plugin_settings import PLUGIN_CONFIG_KEY
from acapy_agent.utils.testing import create_test_profile

from did_provisioner.keys.askar import AskarKeyManager
from did_provisioner.keys.base import BaseKeyManager
from did_provisioner.keys.provisioner import KeyProvisioner
from did_provisioner.registrar.client import UniversalRegistrarClient
from did_provisioner.registry import BaseDIDRegistry


@pytest.fixture
def plugin_settings():
    return {
        PLUGIN_CONFIG_KEY: {
            "did_provisioner": {
                "domain": "example.com",
                "did_method": "trustbloc",
                "registrar_timeout": "30",
            }
        }
    }


@pytest.fixture
async def profile(plugin_settings):
    profile = await create_test_profile(plugin_settings)
    yield profile


@pytest.fixture
def key_manager(profile):
    return AskarKeyManager(profile)


@pytest.fixture
def key_provisioner(key_manager):
    return KeyProvisioner(key_manager)


@pytest.fixture
def mock_key_manager():
    key_manager = MagicMock(BaseKeyManager)
    key_manager.create = AsyncMock(return_value="MOCK_KID")
    key_manager.export_public_key = AsyncMock(return_value=b"\x01" * 32)
    key_manager.import_private_key = AsyncMock(
        side_effect=lambda private_key, key_type, kid: kid
    )
    return key_manager


@pytest.fixture
def mock_registry():
    registry = MagicMock(BaseDIDRegistry)
    registry.resolve = AsyncMock()
    registry.create = AsyncMock()
    return registry


@pytest.fixture
def mock_registrar_client():
    client = MagicMock(UniversalRegistrarClient)
    client.create_did = AsyncMock()
    return client


@pytest.fixture
def canonical_did():
    return "did:trustbloc:ledgerA:abc123"
