from fastapi import FastAPI
from typing import Optional
import logging

from app.core.config import Settings, settings
from app.core.errors import register_exception_handlers
from app.core.middleware import RequestLogMiddleware
from app.core.sweeper import ExpirySweeper
from app.db.memory import MailStore
from app.api import health, mailbox

def create_app(config: Optional[Settings] = None) -> FastAPI:
    config = config or settings
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = FastAPI(title=config.PROJECT_NAME)
    app.state.settings = config
    app.state.store = MailStore(domain=config.MAIL_DOMAIN, ttl_seconds=config.ADDRESS_TTL_SECONDS)
    app.state.sweeper = ExpirySweeper(app.state.store, interval_seconds=config.SWEEP_INTERVAL_SECONDS)

    app.add_middleware(RequestLogMiddleware)
    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(mailbox.router, prefix=config.API_V1_STR)

    @app.on_event("startup")
    async def startup_event():
        if config.SWEEPER_ENABLED:
            app.state.sweeper.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.sweeper.stop()

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
