# File: config/settings.py
import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
dotenv_path = os.path.join(project_root, '.env')

if os.path.exists(dotenv_path):
    if load_dotenv(dotenv_path=dotenv_path):
        logger.info(f"Loaded .env file from {dotenv_path}")
    else:
        logger.info(f".env file at {dotenv_path} processed but set no new vars.")
else:
    logger.debug(f".env file not found at {dotenv_path}. Using system environment variables or defaults.")


# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# --- API Configuration ---
API_KEY = os.getenv("API_KEY")
if not API_KEY:
    logger.warning("API_KEY is not set. Calculation endpoints will reject every request.")

FLASK_PORT = int(os.getenv("FLASK_PORT", "5000"))
API_THREADS = int(os.getenv("API_THREADS", "8"))
CORS_ALLOW_ORIGIN = os.getenv("CORS_ALLOW_ORIGIN", "*")

logger.debug(f"FLASK_PORT = {FLASK_PORT}")
logger.debug(f"API_THREADS = {API_THREADS}")
logger.debug(f"CORS_ALLOW_ORIGIN = {CORS_ALLOW_ORIGIN}")
