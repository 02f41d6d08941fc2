from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import UploadFile

from formrelay.core.config import Settings

DEFAULT_FILENAME = 'upload'
DEFAULT_ALT = 'Upload'
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


class FileRelayConfig(BaseModel):
    """Everything the artwork relay needs to talk to the Shopify Admin API"""

    store_domain: str
    api_version: str
    admin_token: str
    timeout: Optional[float] = None

    @property
    def graphql_url(self) -> str:
        return f'https://{self.store_domain}/admin/api/{self.api_version}/graphql.json'

    @classmethod
    def from_settings(cls, settings: Settings) -> 'FileRelayConfig':
        return cls(
            store_domain=settings.shopify_store,
            api_version=settings.shopify_api_version,
            admin_token=settings.shopify_admin_token,
            timeout=settings.remote_timeout,
        )


@dataclass
class Artwork:
    """A file posted with the artwork form, read into memory"""

    filename: str
    content_type: str
    content: bytes

    @classmethod
    async def from_upload(cls, upload: UploadFile) -> 'Artwork':
        return cls(
            filename=upload.filename or '',
            content_type=upload.content_type or DEFAULT_CONTENT_TYPE,
            content=await upload.read(),
        )

    @property
    def upload_name(self) -> str:
        return self.filename or DEFAULT_FILENAME

    def staged_upload_input(self) -> dict:
        return {'resource': 'FILE', 'filename': self.upload_name, 'mimeType': self.content_type, 'httpMethod': 'POST'}

    def file_create_input(self, resource_url: str) -> dict:
        return {'originalSource': resource_url, 'contentType': 'FILE', 'alt': self.filename or DEFAULT_ALT}


class StagedUploadParameter(BaseModel):
    name: str
    value: str


class StagedTarget(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    resource_url: str = Field(alias='resourceUrl')
    parameters: list[StagedUploadParameter] = []


class CreatedFileImage(BaseModel):
    url: Optional[str] = None


class CreatedFile(BaseModel):
    alt: Optional[str] = None
    url: Optional[str] = None
    image: Optional[CreatedFileImage] = None

    @property
    def public_url(self) -> Optional[str]:
        """Generic files have a url, images only get one on the nested image"""
        return self.url or (self.image and self.image.url) or None


class UserError(BaseModel):
    field: Optional[list[str]] = None
    message: str
