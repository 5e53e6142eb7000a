import os

from .config import Config, DB_CONFIG

API_URL = Config.API_URL
API_TIMEOUT = Config.API_TIMEOUT
DATA_DIR = Config.DATA_DIR
API_PREFIX = Config.API_PREFIX

DB_CONFIG = dict(DB_CONFIG)

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, the API server applies schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the bootstrap employees on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
