import uvicorn

from expenseowl.core.config import get_settings


def main() -> None:
    settings = get_settings()
    # log_config=None keeps the JSON logging installed by create_app
    uvicorn.run(
        "expenseowl.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
