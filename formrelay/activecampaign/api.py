import logging
from typing import Optional

import httpx
import logfire

from formrelay.activecampaign.models import ContactSyncConfig
from formrelay.exceptions import FieldListError

logger = logging.getLogger('formrelay.activecampaign')

FIELDS_PAGE_LIMIT = 200
SUBSCRIBED_STATUS = 1


async def ac_request(
    config: ContactSyncConfig,
    endpoint: str,
    *,
    method: str = 'GET',
    query_params: Optional[dict] = None,
    data: Optional[dict] = None,
) -> httpx.Response:
    """
    Make a request to the ActiveCampaign API v3.

    Unlike most of our API helpers this doesn't raise on error responses, callers decide which status codes they can
    live with (e.g. a 409 when a contact is already on a list).

    Args:
        config: ActiveCampaign account config
        endpoint: The API endpoint (without /api/3/ prefix)
        method: HTTP method
        query_params: Query parameters dict
        data: Request body data

    Returns:
        The response
    """
    url = f'{config.api_url}/api/3/{endpoint}'
    headers = {'Api-Token': config.api_key, 'Content-Type': 'application/json', 'Accept': 'application/json'}

    with logfire.span(f'{method} {endpoint}'):
        async with httpx.AsyncClient(timeout=config.timeout, follow_redirects=True) as client:
            response = await client.request(method=method, url=url, headers=headers, params=query_params, json=data)
        logger.info(f'Request method={method} url={endpoint} status_code={response.status_code}')
        if not response.is_success:
            logger.warning(f'ActiveCampaign API error for {method} {endpoint}: {response.status_code} {response.text}')
        return response


async def get_fields(config: ContactSyncConfig) -> list[dict]:
    """Get the custom contact fields defined in ActiveCampaign"""
    response = await ac_request(config, 'fields', query_params={'limit': FIELDS_PAGE_LIMIT})
    if not response.is_success:
        raise FieldListError('Failed to load AC fields')
    return response.json().get('fields') or []


async def sync_contact(config: ContactSyncConfig, contact_data: dict) -> httpx.Response:
    """Create or update a contact, ActiveCampaign matches on the email address"""
    return await ac_request(config, 'contact/sync', method='POST', data={'contact': contact_data})


async def add_to_list(config: ContactSyncConfig, contact_id: str, list_id: str) -> httpx.Response:
    """Subscribe a contact to a list"""
    data = {'contactList': {'list': str(list_id), 'contact': str(contact_id), 'status': SUBSCRIBED_STATUS}}
    return await ac_request(config, 'contactLists', method='POST', data=data)


async def add_to_automation(config: ContactSyncConfig, contact_id: str, automation_id: str) -> httpx.Response:
    """Enroll a contact in an automation"""
    data = {'contact': {'id': str(contact_id)}}
    return await ac_request(config, f'automations/{automation_id}/contacts', method='POST', data=data)


async def add_tag(config: ContactSyncConfig, contact_id: str, tag_id: str) -> httpx.Response:
    """Apply a tag to a contact"""
    data = {'contactTag': {'contact': str(contact_id), 'tag': str(tag_id)}}
    return await ac_request(config, 'contactTags', method='POST', data=data)
