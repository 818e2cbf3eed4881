# gst_billing/main.py

from fastapi import FastAPI

from gst_billing.api.v1 import v1_router
from gst_billing.config.settings import settings
from gst_billing.core.logging_config import setup_logging


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

    @app.on_event("startup")
    async def startup():
        setup_logging(settings.LOG_LEVEL)

    @app.get("/", tags=["Health"])
    async def health():
        return {"status": "ok", "message": "GST Billing Running"}

    app.include_router(v1_router)
    return app


app = create_app()
