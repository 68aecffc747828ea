import uvicorn

from app.config import get_settings


def run_web_server():
    """Launches the Uvicorn web server on the configured host and port."""
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run_web_server()
