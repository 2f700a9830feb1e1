#!/usr/bin/env python3
"""
Flask entry point for the navigation assistant.

Configuration comes from environment variables (and a local .env file).
"""
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent / "src"))

from nav_assistant.api import create_app
from nav_assistant.app import NavAssistantApp
from nav_assistant.config_loader import load_config_from_env
from nav_assistant.utils import RequestLog

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# Lexicon and API key problems are fatal: never serve with a broken lexicon
config = load_config_from_env()
assistant = NavAssistantApp(config)
assistant.initialize()

request_log = RequestLog(config.request_log_dir, retention_days=config.log_retention_days)
removed = request_log.cleanup(days_to_keep=config.log_retention_days)
if removed:
    logger.info(f"Removed {removed} expired daily log file(s)")

app = create_app(assistant, request_log, config)


if __name__ == "__main__":
    port = int(os.getenv("PORT", 4000))
    logger.info(f"AI Navigator backend running on port {port}")
    app.run(host="0.0.0.0", port=port, debug=False)
