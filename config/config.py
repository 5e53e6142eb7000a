import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]


class Config:
    # Remote backend: when set, clients talk to this CRUD API instead of the local store.
    API_URL = os.environ.get("API_URL", "").strip()
    API_TIMEOUT = float(os.environ.get("API_TIMEOUT", "10"))

    # Local backend: directory of the JSON document store.
    DATA_DIR = os.environ.get("DATA_DIR", str(BASE_DIR / "data"))

    # HTTP surface / MySQL store
    API_PREFIX = os.environ.get("API_PREFIX", "/api")
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "absence_tracker")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
