import logging

import logfire

from formrelay.exceptions import FileRelayError
from formrelay.shopify import api
from formrelay.shopify.models import Artwork, CreatedFile, FileRelayConfig, StagedTarget, UserError

logger = logging.getLogger('formrelay.shopify')


def _log_user_errors(operation: str, payload: dict):
    for error in payload.get('userErrors') or []:
        user_error = UserError(**error)
        logger.warning(f'Shopify {operation} user error on {user_error.field}: {user_error.message}')


class FileRelayProcessor:
    """
    Relays artwork into Shopify Files using staged uploads:

    1. Ask Shopify for one staged target per file, in a single call.
    2. Upload each file to its target, file i going to target i.
    3. Create the files in Shopify from the staged resource URLs, in a single call.

    Any failure stops the relay. Files already uploaded to their staged targets are left there for Shopify to expire.
    """

    def __init__(self, config: FileRelayConfig):
        self.config = config

    async def stage(self, artworks: list[Artwork]) -> list[StagedTarget]:
        payload = await api.staged_uploads_create(self.config, [a.staged_upload_input() for a in artworks])
        _log_user_errors('stagedUploadsCreate', payload)
        targets = [StagedTarget(**t) for t in payload.get('stagedTargets') or []]
        if not targets:
            raise FileRelayError('No staged targets from Shopify')
        if len(targets) != len(artworks):
            raise FileRelayError('Target/file count mismatch')
        return targets

    async def upload(self, artworks: list[Artwork], targets: list[StagedTarget]) -> list[str]:
        resource_urls = []
        for artwork, target in zip(artworks, targets):
            response = await api.upload_to_staged_target(self.config, target, artwork)
            if not response.is_success:
                raise FileRelayError(f'Staged upload failed: {response.text}')
            resource_urls.append(target.resource_url)
        return resource_urls

    async def finalise(self, artworks: list[Artwork], resource_urls: list[str]) -> list[str]:
        inputs = [a.file_create_input(url) for a, url in zip(artworks, resource_urls)]
        payload = await api.file_create(self.config, inputs)
        _log_user_errors('fileCreate', payload)
        created = [CreatedFile(**f) for f in payload.get('files') or [] if f]
        return [f.public_url for f in created if f.public_url]

    async def process(self, artworks: list[Artwork]) -> list[str]:
        """Returns the public URL of every file Shopify created, in the order they were posted"""
        with logfire.span('relay_files_to_shopify', file_count=len(artworks)):
            targets = await self.stage(artworks)
            resource_urls = await self.upload(artworks, targets)
            urls = await self.finalise(artworks, resource_urls)
            logger.info(f'Saved {len(urls)} of {len(artworks)} files to Shopify')
            return urls
