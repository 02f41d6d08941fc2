from functools import cached_property
from typing import Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from formrelay.activecampaign.field_mappings import QUOTE_FIELD_TITLES, TOTALS_FIELD_SOURCES
from formrelay.core.config import Settings

FieldValue = Optional[Union[bool, int, float, str]]


def _none_to_blank(v):
    return '' if v is None else v


def _to_str(v):
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


def _strip(v: str) -> str:
    return v.strip()


class ContactSyncConfig(BaseModel):
    """Everything the quote sync needs to talk to ActiveCampaign"""

    api_url: str
    api_key: str
    list_id: Optional[str] = None
    automation_id: Optional[str] = None
    tag_id: Optional[str] = None
    field_ids: dict[str, str | int] = {}
    timeout: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> 'ContactSyncConfig':
        return cls(
            api_url=settings.ac_api_url,
            api_key=settings.ac_api_key,
            list_id=settings.ac_list_id,
            automation_id=settings.ac_automation_id,
            tag_id=settings.ac_tag_id,
            field_ids=settings.ac_field_ids,
            timeout=settings.remote_timeout,
        )


class QuoteTotals(BaseModel):
    per: FieldValue = None
    sub: FieldValue = None
    tax: FieldValue = None
    total: FieldValue = None


class QuoteForm(BaseModel):
    """Schema for the quote form posted from the storefront"""

    model_config = ConfigDict(extra='allow', populate_by_name=True)

    name: str = ''
    email: str = ''
    phone: str = ''

    garment_type: FieldValue = Field(None, alias='garmentType')
    garment_color: FieldValue = Field(None, alias='garmentColor')
    garment_quality: FieldValue = Field(None, alias='garmentQuality')
    garment_source: FieldValue = Field(None, alias='garmentSource')
    print_type: FieldValue = Field(None, alias='printType')
    screen_colors: FieldValue = Field(None, alias='screenColors')
    stitches: FieldValue = None
    print_size: FieldValue = Field(None, alias='printSize')
    art_w: FieldValue = Field(None, alias='artW')
    art_h: FieldValue = Field(None, alias='artH')
    locations: FieldValue = None
    rush_fee: FieldValue = Field(None, alias='rushFee')
    ship_pickup: FieldValue = None
    tax_exempt: FieldValue = None
    notes: FieldValue = None

    totals: Optional[QuoteTotals] = None

    _none_to_blank = field_validator('name', 'email', 'phone', mode='before')(_none_to_blank)
    _to_str = field_validator('phone', mode='before')(_to_str)
    _strip = field_validator('email')(_strip)

    @cached_property
    def _name_split(self) -> list[str]:
        return self.name.split(' ', 1)

    @property
    def first_name(self) -> Optional[str]:
        return self._name_split[0] or None

    @property
    def last_name(self) -> Optional[str]:
        if len(self._name_split) > 1:
            return self._name_split[1].strip() or None
        return None

    def field_items(self) -> Iterator[tuple[str, FieldValue]]:
        """
        Yields (field key, value) for every custom field on the quote, in the order they're sent to ActiveCampaign.
        The totals are only included when the form posted a `totals` object.
        """
        data = self.model_dump(by_alias=True)
        for key in QUOTE_FIELD_TITLES:
            yield key, data.get(key)
        if self.totals:
            for key, attr in TOTALS_FIELD_SOURCES.items():
                yield key, getattr(self.totals, attr)
