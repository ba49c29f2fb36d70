from contextlib import asynccontextmanager

from fastapi import FastAPI

from signup.infrastructure.db.pool import close_pool, get_pool
from signup.infrastructure.email.http_notification_adapter import HttpNotificationAdapter
from signup.infrastructure.http.client import (
    close_http_client,
    get_http_client,
    open_http_client,
)
from signup.infrastructure.redis_cache.pool import close_redis, get_redis
from signup.logging import setup_logging
from signup.presentation.api import api
from signup.settings import get_settings

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    pool = get_pool()
    if pool.closed:
        await pool.open()

    await open_http_client()

    get_redis()

    # One shared notification adapter on top of the shared HTTP client
    notification_adapter = HttpNotificationAdapter(
        base_url=settings.smtp_base_url,
        client=get_http_client(),
    )
    app.state.notification_adapter = notification_adapter

    try:
        yield
    finally:
        # shutdown
        await notification_adapter.aclose()  # leaves the shared client open
        await close_http_client()
        await close_redis()
        await close_pool()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Account Signup API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api)
    return app


app = create_app()
