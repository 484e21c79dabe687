"""Main application entry point.

Runs FastAPI (port 8000) with NiceGUI mounted for the chat and knowledge
pages. Environment variables are loaded from .env file.
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

APP_TITLE = "契約書レビューAI"


def register_pages() -> None:
    """Import the page modules so their ``@ui.page`` routes exist."""
    from contract_review.ui import chat_page, knowledge_page  # noqa: F401


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server."""
    import uvicorn
    from nicegui import ui

    from contract_review.api.app import create_app

    app = create_app()
    register_pages()

    ui.run_with(
        app,
        title=APP_TITLE,
        favicon="⚖️",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "contract-review-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_ui() -> None:
    """Run only the NiceGUI pages (port 8080), talking to API_BASE_URL."""
    from nicegui import ui

    register_pages()
    ui.run(title=APP_TITLE, port=8080, reload=False)


def run_separate() -> None:
    """Run FastAPI and NiceGUI as separate servers.

    FastAPI on port 8000, NiceGUI on port 8080.
    """
    import subprocess

    logger.info("Starting FastAPI on http://localhost:8000")
    logger.info("Starting NiceGUI on http://localhost:8080")

    api_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "contract_review.api.app:app",
            "--host",
            os.getenv("HOST", "0.0.0.0"),
            "--port",
            "8000",
        ]
    )
    ui_env = {**os.environ, "API_BASE_URL": os.getenv("API_BASE_URL") or "http://localhost:8000"}
    ui_proc = subprocess.Popen(
        [sys.executable, "-c", "from contract_review.main import run_ui; run_ui()"],
        env=ui_env,
    )

    try:
        while api_proc.poll() is None and ui_proc.poll() is None:
            try:
                api_proc.wait(timeout=1)
            except subprocess.TimeoutExpired:
                continue
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        api_proc.terminate()
        ui_proc.terminate()
        api_proc.wait()
        ui_proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on port 8000).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting contract review chat in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
