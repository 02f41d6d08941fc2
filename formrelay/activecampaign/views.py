import logging
from typing import Optional

from fastapi import APIRouter, Depends
from starlette.responses import Response

from formrelay.activecampaign.models import ContactSyncConfig, QuoteForm
from formrelay.activecampaign.process import QuoteSyncProcessor
from formrelay.common.api.errors import HTTP400, error_response
from formrelay.core.config import settings

logger = logging.getLogger('formrelay.activecampaign')

router = APIRouter(prefix='/api', tags=['activecampaign'])


def get_contact_sync_config() -> ContactSyncConfig:
    return ContactSyncConfig.from_settings(settings)


@router.options('/quote-to-ac', include_in_schema=False)
async def quote_to_ac_options():
    return Response(status_code=200)


@router.post('/quote-to-ac', name='quote-to-ac')
async def quote_to_ac(form: Optional[QuoteForm] = None, config: ContactSyncConfig = Depends(get_contact_sync_config)):
    """
    Quote form on the storefront → ActiveCampaign contact.

    Upserts the contact by email, fills in the quote custom fields, then subscribes/enrolls/tags it as configured.
    """
    form = form or QuoteForm()
    if not form.email:
        raise HTTP400('Email required')

    try:
        outcome = await QuoteSyncProcessor(config).process(form)
    except Exception as e:
        logger.error(f'Error syncing quote for {form.email}: {e}', exc_info=True)
        return error_response(str(e), 500)

    if not outcome.ok:
        logger.warning(f'Quote sync for {form.email} failed: {outcome.error} ({outcome.status_code})')
        return error_response(outcome.error, outcome.status_code)
    return {'ok': True, 'contactId': outcome.contact_id}
