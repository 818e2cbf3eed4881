import uvicorn

from gst_billing.config.settings import settings


def main() -> None:
    uvicorn.run(
        "gst_billing.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    main()
