"""Configuration for GrowDash"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
_repo_root = Path(__file__).parent.parent.resolve()
_env_file = _repo_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

# Base directory
BASE_DIR = Path(__file__).parent.resolve()

# Sensor relay (one GET per metric topic)
RELAY_BASE_URL = os.getenv("RELAY_BASE_URL", "https://apis.bemfa.com/va/getmsg")
RELAY_UID = os.getenv("RELAY_UID", "")

# Metric -> relay topic. Keys are MetricId values.
METRIC_TOPICS = {
    "light": os.getenv("TOPIC_LIGHT", "light"),
    "temperature": os.getenv("TOPIC_TEMPERATURE", "tem"),
    "humidity": os.getenv("TOPIC_HUMIDITY", "hum"),
    "soil_moisture": os.getenv("TOPIC_SOIL_MOISTURE", "soil"),
    "water_depth": os.getenv("TOPIC_WATER_DEPTH", "water"),
}

# Polling
POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", "15"))
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "10"))
HEALTH_SUMMARY_INTERVAL_SECONDS = float(os.getenv("HEALTH_SUMMARY_INTERVAL_SECONDS", "300"))

# AI photo analysis
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
ANALYSIS_MODEL = os.getenv("ANALYSIS_MODEL", "gemini-3-flash-preview")
SILHOUETTE_MODEL = os.getenv("SILHOUETTE_MODEL", "gemini-2.5-flash-image")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/growdash.log")

# Debug
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
