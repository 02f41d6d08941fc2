from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file='.env', extra='allow', case_sensitive=False)

    log_level: str = 'INFO'

    logfire_token: Optional[str] = None

    # Sentry
    sentry_dsn: Optional[str] = None

    # The storefront allowed to post to us
    cors_origin: str = 'https://3tprintsolutions.com'

    # None means outbound requests wait as long as the remote takes
    remote_timeout: Optional[float] = None

    # ActiveCampaign
    ac_api_url: str = 'https://example.api-us1.com'
    ac_api_key: str = 'test-key'
    ac_list_id: Optional[str] = None
    ac_automation_id: Optional[str] = None
    ac_tag_id: Optional[str] = None
    # Numeric custom field IDs keyed by form field, these win over the title lookup
    ac_field_ids: dict[str, str | int] = {}
    ac_field_cache_ttl: int = 600

    # Shopify
    shopify_store: str = 'example.myshopify.com'
    shopify_api_version: str = '2024-07'
    shopify_admin_token: str = 'test-token'

    @field_validator('ac_api_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')

    @field_validator('ac_list_id', 'ac_automation_id', 'ac_tag_id', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


settings = Settings()
