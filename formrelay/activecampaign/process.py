import logging
from dataclasses import dataclass
from typing import Optional

import logfire

from formrelay.activecampaign import api
from formrelay.activecampaign.fields import FieldIdCache, build_field_values, field_id_cache
from formrelay.activecampaign.models import ContactSyncConfig, QuoteForm

logger = logging.getLogger('formrelay.activecampaign')

# ActiveCampaign answers 409 when the contact is already on the list/automation/tag. We've always treated that as
# done, though it's never been confirmed that every API version means the same thing by it.
ALREADY_APPLIED_STATUS_CODE = 409


@dataclass
class SyncOutcome:
    contact_id: Optional[str] = None
    status_code: int = 200
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, status_code: int, error: str) -> 'SyncOutcome':
        return cls(status_code=status_code, error=error)


def contact_payload(form: QuoteForm, field_values: list[dict]) -> dict:
    data = {'email': form.email, 'phone': form.phone, 'fieldValues': field_values}
    if form.first_name:
        data['firstName'] = form.first_name
    if form.last_name:
        data['lastName'] = form.last_name
    return data


class QuoteSyncProcessor:
    """
    Pushes a quote form into ActiveCampaign: upserts the contact, then subscribes it to the list, enrolls it in the
    automation and tags it, for whichever of those are configured.

    Each step runs only once the previous one has succeeded. The first failing step stops the sync and its status
    code is what we return to the storefront.
    """

    def __init__(self, config: ContactSyncConfig, field_cache: Optional[FieldIdCache] = None):
        self.config = config
        self.field_cache = field_cache or field_id_cache

    async def process(self, form: QuoteForm) -> SyncOutcome:
        with logfire.span('sync_quote_to_activecampaign'):
            field_values = await build_field_values(form, self.config, self.field_cache)

            response = await api.sync_contact(self.config, contact_payload(form, field_values))
            if not response.is_success:
                return SyncOutcome.failed(response.status_code, 'Contact sync failed')
            contact_id = (response.json().get('contact') or {}).get('id')
            if not contact_id:
                return SyncOutcome.failed(500, 'No contact id returned')
            contact_id = str(contact_id)
            logger.info(f'Synced contact {contact_id} with {len(field_values)} custom fields')

            steps = [
                ('list', self.config.list_id, api.add_to_list, 'List subscribe failed'),
                ('automation', self.config.automation_id, api.add_to_automation, 'Automation add failed'),
                ('tag', self.config.tag_id, api.add_tag, 'Tag add failed'),
            ]
            for label, target_id, step, error in steps:
                if not target_id:
                    continue
                response = await step(self.config, contact_id, target_id)
                if response.status_code == ALREADY_APPLIED_STATUS_CODE:
                    logger.info(f'Contact {contact_id} already on {label} {target_id}')
                elif not response.is_success:
                    return SyncOutcome.failed(response.status_code, error)

            return SyncOutcome(contact_id=contact_id)
