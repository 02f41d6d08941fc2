import json
import logging

import httpx
import logfire

from formrelay.exceptions import ShopifyAPIError
from formrelay.shopify.models import Artwork, FileRelayConfig, StagedTarget

logger = logging.getLogger('formrelay.shopify')

STAGED_UPLOADS_CREATE = """
mutation stagedUploadsCreate($input: [StagedUploadInput!]!) {
  stagedUploadsCreate(input: $input) {
    stagedTargets {
      url
      resourceUrl
      parameters { name value }
    }
    userErrors { field message }
  }
}
"""

FILE_CREATE = """
mutation fileCreate($files: [FileCreateInput!]!) {
  fileCreate(files: $files) {
    files { alt url ... on MediaImage { image { url } } }
    userErrors { field message }
  }
}
"""


async def shopify_graphql(config: FileRelayConfig, query: str, variables: dict, *, operation: str = 'graphql') -> dict:
    """
    Run a query against the Shopify Admin GraphQL API.

    Raises ShopifyAPIError if the request fails or the response has top level errors, the message being the errors
    (or the whole response) as JSON.

    Returns:
        The `data` of the response
    """
    headers = {'X-Shopify-Access-Token': config.admin_token, 'Content-Type': 'application/json'}

    with logfire.span(f'shopify {operation}'):
        async with httpx.AsyncClient(timeout=config.timeout, follow_redirects=True) as client:
            response = await client.post(
                config.graphql_url, headers=headers, json={'query': query, 'variables': variables}
            )
        logger.info(f'Request method=POST operation={operation} status_code={response.status_code}')
        try:
            content = response.json()
        except ValueError:
            raise ShopifyAPIError(f'{response.status_code} {response.text}')
        if not response.is_success or content.get('errors'):
            raise ShopifyAPIError(json.dumps(content.get('errors') or content))
        return content['data']


async def staged_uploads_create(config: FileRelayConfig, inputs: list[dict]) -> dict:
    """Ask Shopify for somewhere to upload each file to"""
    data = await shopify_graphql(config, STAGED_UPLOADS_CREATE, {'input': inputs}, operation='stagedUploadsCreate')
    return data['stagedUploadsCreate']


async def file_create(config: FileRelayConfig, files: list[dict]) -> dict:
    """Turn staged uploads into files in Content → Files"""
    data = await shopify_graphql(config, FILE_CREATE, {'files': files}, operation='fileCreate')
    return data['fileCreate']


async def upload_to_staged_target(config: FileRelayConfig, target: StagedTarget, artwork: Artwork) -> httpx.Response:
    """
    POSTs the file to the staged upload URL. The signed parameters Shopify gave us go first and in the order we got
    them, the storage backend rejects the upload otherwise.
    """
    form_data = {p.name: p.value for p in target.parameters}
    files = {'file': (artwork.upload_name, artwork.content, artwork.content_type)}

    with logfire.span('staged upload {filename}', filename=artwork.upload_name):
        async with httpx.AsyncClient(timeout=config.timeout, follow_redirects=True) as client:
            response = await client.post(target.url, data=form_data, files=files)
        logger.info(
            f'Staged upload filename={artwork.upload_name} size={len(artwork.content)} '
            f'status_code={response.status_code}'
        )
        return response
