from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp


class StorefrontCORSMiddleware(CORSMiddleware):
    """
    CORS for the single storefront origin.

    Preflights always get a 200 with an empty body and the same fixed Access-Control-Allow-* headers, whatever origin
    or request headers the browser asks about. It's left to the browser to decide whether the actual request goes
    ahead. Non preflight requests are handled as normal by starlette's CORSMiddleware.
    """

    def __init__(self, app: ASGIApp, allow_origin: str, allow_methods: list[str], allow_headers: list[str]):
        super().__init__(app, allow_origins=[allow_origin], allow_methods=allow_methods, allow_headers=allow_headers)
        self.storefront_headers = {
            'Access-Control-Allow-Origin': allow_origin,
            'Access-Control-Allow-Methods': ', '.join(allow_methods),
            'Access-Control-Allow-Headers': ', '.join(allow_headers),
        }

    def preflight_response(self, request_headers: Headers) -> Response:
        return Response(status_code=200, headers=self.storefront_headers)
