import logging

from fastapi import APIRouter, Depends
from starlette.datastructures import UploadFile
from starlette.requests import Request
from starlette.responses import Response

from formrelay.common.api.errors import error_response
from formrelay.core.config import settings
from formrelay.shopify.models import Artwork, FileRelayConfig
from formrelay.shopify.process import FileRelayProcessor

logger = logging.getLogger('formrelay.shopify')

router = APIRouter(prefix='/api', tags=['shopify'])

ART_FILES_FIELD = 'art_files'


def get_file_relay_config() -> FileRelayConfig:
    return FileRelayConfig.from_settings(settings)


@router.options('/save-to-shopify-files', include_in_schema=False)
async def save_to_shopify_files_options():
    return Response(status_code=200)


@router.post('/save-to-shopify-files', name='save-to-shopify-files')
async def save_to_shopify_files(request: Request, config: FileRelayConfig = Depends(get_file_relay_config)):
    """
    Artwork form on the storefront → Shopify Files.

    The body is read here rather than by FastAPI so we can take every file posted under `art_files`, whatever else
    the form contains.
    """
    try:
        async with request.form() as form:
            artworks = [
                await Artwork.from_upload(f) for f in form.getlist(ART_FILES_FIELD) if isinstance(f, UploadFile)
            ]
        if not artworks:
            return {'ok': True, 'saved': [], 'note': 'No files in submission'}

        urls = await FileRelayProcessor(config).process(artworks)
    except Exception as e:
        logger.error(f'Error saving files to Shopify: {e}', exc_info=True)
        return error_response(str(e), 500)

    return {'ok': True, 'count': len(urls), 'urls': urls}
