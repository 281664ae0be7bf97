import logging
import socket
import sys

import uvicorn

import config
from db.store import RecordStore
from processing.summarizer import create_summary_service
from server.app import create_app
from sharing.mailer import LoggingMailer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("meetnotes")

PORT_SCAN_RANGE = 13


def find_available_port(start: int, end: int) -> int:
    for port in range(start, end + 1):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((config.HOST, port))
                return port
            except OSError:
                continue
    raise RuntimeError(f"No free port between {start} and {end}")


def pick_port() -> int:
    return find_available_port(config.PORT, config.PORT + PORT_SCAN_RANGE)


def main():
    try:
        port = pick_port()
    except RuntimeError as e:
        logger.error(str(e))
        sys.exit(1)

    if port != config.PORT:
        logger.info("Port %d in use, using %d", config.PORT, port)

    # One store for the whole process, shared by every request
    store = RecordStore()
    summarizer = create_summary_service(
        provider=config.LLM_PROVIDER,
        groq_api_key=config.GROQ_API_KEY,
        anthropic_api_key=config.ANTHROPIC_API_KEY,
        groq_model=config.GROQ_MODEL,
        groq_url=config.GROQ_URL,
        anthropic_model=config.ANTHROPIC_MODEL,
        timeout=config.LLM_TIMEOUT,
        template_delay=config.TEMPLATE_DELAY,
    )
    mailer = LoggingMailer(delay=config.MAIL_DELAY)

    app = create_app(store, summarizer, mailer, debug=config.DEBUG_ENDPOINTS)

    logger.info("Meeting Notes Summarizer listening on http://%s:%d", config.HOST, port)
    uvicorn.run(app, host=config.HOST, port=port, log_level="warning")


if __name__ == "__main__":
    main()
