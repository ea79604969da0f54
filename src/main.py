"""Console entry point.

Serves the knowledge base console either mounted on the FastAPI app
(``RUN_MODE=integrated``, default) or as a standalone NiceGUI server
(``RUN_MODE=standalone``). Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Signs the per-browser storage that holds the user's API key
STORAGE_SECRET = os.getenv("NICEGUI_STORAGE_SECRET", "kb-console-secret")


def run_integrated() -> None:
    """Mount the console on the FastAPI app and serve both with uvicorn."""
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.console_page import console_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(app, title="Knowledge Base", favicon="📚", storage_secret=STORAGE_SECRET)

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Console on http://{host}:{port}/, health check on /health")

    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def run_standalone() -> None:
    """Serve only the console with NiceGUI's built-in server."""
    from src.ui.console_page import main as run_console

    run_console()


def main() -> None:
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting Knowledge Base Console in {mode} mode")

    if mode == "standalone":
        run_standalone()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
