from contextlib import asynccontextmanager

import logfire
import sentry_sdk
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from formrelay.activecampaign.views import router as activecampaign_router
from formrelay.common.api.cors import StorefrontCORSMiddleware
from formrelay.common.api.errors import http_exception_handler, validation_exception_handler
from formrelay.core.config import settings
from formrelay.core.logging import get_logger
from formrelay.shopify.views import router as shopify_router

logger = get_logger('formrelay')

# Initialize Logfire
if settings.logfire_token:
    logfire.configure(token=settings.logfire_token)

# Initialize Sentry
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn, traces_sample_rate=1.0)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f'Starting Formrelay, accepting submissions from {settings.cors_origin}')
    yield
    logger.info('Shutting down Formrelay')


app = FastAPI(
    title='Formrelay',
    description='Relays storefront quote and artwork forms to ActiveCampaign and Shopify',
    version='1.0.0',
    lifespan=lifespan,
)

# Only the storefront may post to us
app.add_middleware(
    StorefrontCORSMiddleware,
    allow_origin=settings.cors_origin,
    allow_methods=['POST', 'OPTIONS'],
    allow_headers=['Content-Type', 'Api-Token'],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

logfire.instrument_fastapi(app)


@app.get('/')
async def root():
    """Health check endpoint"""
    return {'status': 'ok', 'app': 'Formrelay', 'version': '1.0.0'}


@app.get('/health')
async def health():
    """Health check endpoint"""
    return {'status': 'healthy'}


app.include_router(activecampaign_router)
app.include_router(shopify_router)
