# main.py

from uvicorn import run


def main() -> None:
    run(
        "wanderplan.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()
