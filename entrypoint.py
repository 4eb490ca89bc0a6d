"""Backend entrypoint. Starts uvicorn with host and port from settings."""
import uvicorn

from walletpulse.main import app
from walletpulse.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
