import json
import os
from pathlib import Path

from .log import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "config.json"

DEFAULTS = {
    "mongo_uri": "mongodb://localhost:27017/",
    "database_name": "school_system",
    "log_level": "INFO",
    "server_selection_timeout_ms": 5000,
}


class Config:
    """
    Runtime settings for the ingest pipeline.

    Values come from config/config.json when it exists, then the
    INSTSYS_MONGO_URI / INSTSYS_DATABASE environment variables win.
    """

    def __init__(self, path=None):
        self.path = Path(path) if path else DEFAULT_CONFIG_PATH
        settings = dict(DEFAULTS)

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                settings.update(json.load(f))
        except FileNotFoundError:
            logger.warning(f"⚠️ {self.path} not found, using default settings")

        self.mongo_uri = os.environ.get("INSTSYS_MONGO_URI", settings["mongo_uri"])
        self.database_name = os.environ.get("INSTSYS_DATABASE", settings["database_name"])
        self.log_level = settings["log_level"]
        self.server_selection_timeout_ms = int(settings["server_selection_timeout_ms"])

    def as_dict(self):
        return {
            "mongo_uri": self.mongo_uri,
            "database_name": self.database_name,
            "log_level": self.log_level,
            "server_selection_timeout_ms": self.server_selection_timeout_ms,
        }
