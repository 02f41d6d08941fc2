import logging
import time
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, field_validator

from formrelay.activecampaign import api
from formrelay.activecampaign.field_mappings import AC_FIELD_TITLES
from formrelay.activecampaign.models import ContactSyncConfig, FieldValue, QuoteForm
from formrelay.core.config import settings

logger = logging.getLogger('formrelay.activecampaign')


class ACField(BaseModel):
    id: str
    title: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def _id_to_str(cls, v):
        return str(v)


def normalise_title(title: str) -> str:
    return title.strip().lower()


class FieldIdCache:
    """
    Maps custom field titles to their ActiveCampaign IDs. The whole map is reloaded from ActiveCampaign when it's
    older than `ttl` seconds, there is no other way of invalidating it.

    Concurrent requests may both find the map stale and both reload it, the last one to finish wins.
    """

    def __init__(self, ttl: float = 600, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._ids: Optional[dict[str, str]] = None
        self._refreshed_at = 0.0

    def is_fresh(self) -> bool:
        return self._ids is not None and self.clock() - self._refreshed_at < self.ttl

    async def get(self, title: str, load_fields: Callable[[], Awaitable[list[dict]]]) -> Optional[str]:
        if not self.is_fresh():
            refreshed_at = self.clock()
            fields = [ACField(**f) for f in await load_fields()]
            self._ids = {normalise_title(f.title): f.id for f in fields if f.title}
            self._refreshed_at = refreshed_at
            logger.info(f'Loaded {len(self._ids)} custom field IDs from ActiveCampaign')
        return self._ids.get(normalise_title(title))


field_id_cache = FieldIdCache(ttl=settings.ac_field_cache_ttl)


def stringify_value(value: FieldValue) -> str:
    """Renders values the same way the storefront does, so `true` rather than `True` and `3` rather than `3.0`"""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


async def resolve_field_id(key: str, config: ContactSyncConfig, cache: FieldIdCache) -> Optional[str]:
    """
    Gets the ActiveCampaign ID for a quote form field. IDs pinned in the config win, otherwise we look the field up
    by its title. None means ActiveCampaign has no such field and the value shouldn't be sent.
    """
    if config.field_ids.get(key):
        return str(config.field_ids[key])
    title = AC_FIELD_TITLES.get(key)
    if not title:
        return None
    return await cache.get(title, lambda: api.get_fields(config))


async def build_field_values(form: QuoteForm, config: ContactSyncConfig, cache: FieldIdCache) -> list[dict]:
    field_values = []
    for key, value in form.field_items():
        if value is None:
            continue
        str_value = stringify_value(value)
        if not str_value:
            continue
        field_id = await resolve_field_id(key, config, cache)
        if field_id:
            field_values.append({'field': field_id, 'value': str_value})
        else:
            logger.debug(f'No ActiveCampaign field for {key}, skipping')
    return field_values
