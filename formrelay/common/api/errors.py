import logging
from typing import Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

logger = logging.getLogger('formrelay')


class HTTP400(HTTPException):
    """400 Bad Request"""

    def __init__(self, detail: str = 'Bad request'):
        super().__init__(status_code=400, detail=detail)


def error_response(message: str, status_code: int, headers: Optional[dict] = None) -> JSONResponse:
    """Every error we return to the storefront is a plain message, never anything structured"""
    return JSONResponse({'error': message}, status_code=status_code, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        message = 'Method not allowed'
    else:
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(message, exc.status_code, headers=getattr(exc, 'headers', None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bodies that can't be parsed are the caller's fault, so they get a 400 rather than FastAPI's 422"""
    errors = exc.errors()
    logger.info(f'Invalid request body for {request.url.path}: {errors}')
    if errors:
        first = errors[0]
        loc = '.'.join(str(p) for p in first.get('loc', ()) if p != 'body')
        message = f'{loc}: {first.get("msg")}' if loc else str(first.get('msg'))
    else:
        message = 'Invalid request body'
    return error_response(message, 400)
