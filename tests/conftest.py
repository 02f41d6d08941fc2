from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from formrelay.activecampaign.fields import FieldIdCache
from formrelay.activecampaign.models import ContactSyncConfig
from formrelay.activecampaign.views import get_contact_sync_config
from formrelay.main import app
from formrelay.shopify.models import FileRelayConfig
from formrelay.shopify.views import get_file_relay_config
from tests.helpers import FakeClock


@pytest.fixture(name='ac_config')
def ac_config_fixture() -> ContactSyncConfig:
    return ContactSyncConfig(
        api_url='https://3tprint.api-us1.com', api_key='ac-key', list_id='1', automation_id='2', tag_id='3'
    )


@pytest.fixture(name='shopify_config')
def shopify_config_fixture() -> FileRelayConfig:
    return FileRelayConfig(store_domain='3tprint.myshopify.com', api_version='2024-07', admin_token='shpat_test')


@pytest.fixture(name='clock')
def clock_fixture() -> FakeClock:
    return FakeClock()


@pytest.fixture(name='field_cache')
def field_cache_fixture(clock) -> FieldIdCache:
    return FieldIdCache(ttl=600, clock=clock)


@pytest.fixture(autouse=True)
def fresh_field_cache(field_cache):
    """Each test starts with an empty process wide field cache"""
    with patch('formrelay.activecampaign.process.field_id_cache', field_cache):
        yield


@pytest.fixture(name='client')
def client_fixture(ac_config, shopify_config):
    """Create a test client talking to the test ActiveCampaign/Shopify accounts"""
    app.dependency_overrides[get_contact_sync_config] = lambda: ac_config
    app.dependency_overrides[get_file_relay_config] = lambda: shopify_config
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
