from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spiget_backend.api.resources import resource_router
from spiget_backend.api.resource_versions import resource_version_router
from spiget_backend.api.update_requests import update_request_router
from spiget_backend.exceptions import register_exception_handlers
from spiget_backend.settings import settings
from spiget_backend.spigot import close_spigot_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting catalog node in {settings.SERVER_MODE} mode")
    yield
    await close_spigot_client()


app = FastAPI(title="Spiget", lifespan=lifespan)

# Register custom exception handlers for structured error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    expose_headers=[
        "X-Total-Count",
        "X-Page-Index",
        "X-Page-Size",
        "X-Page-Count",
        "X-Page-Sort",
        "X-Page-Order",
        "X-Spiget-File-Source",
    ],
)

app.include_router(resource_router)
app.include_router(resource_version_router)
app.include_router(update_request_router)
