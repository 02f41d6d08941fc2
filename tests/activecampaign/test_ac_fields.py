"""
Tests for resolving ActiveCampaign custom field IDs and building contact field values.
"""

from unittest.mock import AsyncMock, patch

import pytest

from formrelay.activecampaign.fields import build_field_values, resolve_field_id, stringify_value
from formrelay.activecampaign.models import QuoteForm
from formrelay.exceptions import FieldListError
from tests.helpers import AC_FIELDS


class TestFieldIdCache:
    async def test_loads_fields_when_empty(self, field_cache):
        load_fields = AsyncMock(return_value=AC_FIELDS)

        assert await field_cache.get('Garment Type', load_fields) == '5'
        load_fields.assert_called_once()

    async def test_title_lookup_ignores_case_and_whitespace(self, field_cache):
        load_fields = AsyncMock(return_value=AC_FIELDS)

        assert await field_cache.get('GARMENT COLOR', load_fields) == '6'
        assert await field_cache.get('  tax exempt', load_fields) == '8'

    async def test_unknown_title(self, field_cache):
        load_fields = AsyncMock(return_value=AC_FIELDS)

        assert await field_cache.get('Shoe Size', load_fields) is None

    async def test_reused_within_ttl(self, field_cache, clock):
        load_fields = AsyncMock(return_value=AC_FIELDS)

        await field_cache.get('Garment Type', load_fields)
        clock.advance(599)
        assert await field_cache.get('Print Type', load_fields) == '7'

        load_fields.assert_called_once()

    async def test_reloaded_once_at_ttl(self, field_cache, clock):
        load_fields = AsyncMock(return_value=AC_FIELDS)

        await field_cache.get('Garment Type', load_fields)
        clock.advance(600)
        load_fields.return_value = [{'id': '50', 'title': 'Garment Type'}]

        assert await field_cache.get('Garment Type', load_fields) == '50'
        assert await field_cache.get('Garment Type', load_fields) == '50'
        assert load_fields.call_count == 2

    async def test_failed_load_leaves_cache_stale(self, field_cache):
        load_fields = AsyncMock(side_effect=FieldListError('Failed to load AC fields'))

        with pytest.raises(FieldListError, match='Failed to load AC fields'):
            await field_cache.get('Garment Type', load_fields)

        assert not field_cache.is_fresh()


class TestResolveFieldId:
    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_configured_id_wins(self, mock_get_fields, ac_config, field_cache):
        ac_config.field_ids = {'garmentType': '123'}

        assert await resolve_field_id('garmentType', ac_config, field_cache) == '123'
        mock_get_fields.assert_not_called()

    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_looked_up_by_title(self, mock_get_fields, ac_config, field_cache):
        mock_get_fields.return_value = AC_FIELDS

        assert await resolve_field_id('garmentType', ac_config, field_cache) == '5'
        assert await resolve_field_id('total_total', ac_config, field_cache) == '9'
        mock_get_fields.assert_called_once_with(ac_config)

    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_unmapped_key(self, mock_get_fields, ac_config, field_cache):
        assert await resolve_field_id('favouriteColour', ac_config, field_cache) is None
        mock_get_fields.assert_not_called()

    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_field_missing_in_activecampaign(self, mock_get_fields, ac_config, field_cache):
        mock_get_fields.return_value = AC_FIELDS

        assert await resolve_field_id('stitches', ac_config, field_cache) is None


class TestStringifyValue:
    def test_values(self):
        assert stringify_value('Hoodie') == 'Hoodie'
        assert stringify_value(3) == '3'
        assert stringify_value(3.0) == '3'
        assert stringify_value(12.5) == '12.5'
        assert stringify_value(True) == 'true'
        assert stringify_value(False) == 'false'
        assert stringify_value('') == ''


class TestBuildFieldValues:
    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_matching_title(self, mock_get_fields, ac_config, field_cache):
        mock_get_fields.return_value = [{'id': '5', 'title': 'Garment Type'}]
        form = QuoteForm(email='jo@example.com', garmentType='Hoodie')

        assert await build_field_values(form, ac_config, field_cache) == [{'field': '5', 'value': 'Hoodie'}]

    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_no_matching_title(self, mock_get_fields, ac_config, field_cache):
        mock_get_fields.return_value = [{'id': '7', 'title': 'Print Type'}]
        form = QuoteForm(email='jo@example.com', garmentType='Hoodie')

        assert await build_field_values(form, ac_config, field_cache) == []

    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_skips_empty_values(self, mock_get_fields, ac_config, field_cache):
        mock_get_fields.return_value = AC_FIELDS
        form = QuoteForm(
            email='jo@example.com', garmentType='', garmentColor=None, printType='Screen', tax_exempt=False
        )

        assert await build_field_values(form, ac_config, field_cache) == [
            {'field': '7', 'value': 'Screen'},
            {'field': '8', 'value': 'false'},
        ]

    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_totals(self, mock_get_fields, ac_config, field_cache):
        mock_get_fields.return_value = AC_FIELDS
        form = QuoteForm(email='jo@example.com', garmentType='Tee', totals={'per': 9.5, 'total': 285.0})

        assert await build_field_values(form, ac_config, field_cache) == [
            {'field': '5', 'value': 'Tee'},
            {'field': '9', 'value': '285'},
        ]

    @patch('formrelay.activecampaign.api.get_fields', new_callable=AsyncMock)
    async def test_no_values_no_lookup(self, mock_get_fields, ac_config, field_cache):
        form = QuoteForm(email='jo@example.com')

        assert await build_field_values(form, ac_config, field_cache) == []
        mock_get_fields.assert_not_called()
