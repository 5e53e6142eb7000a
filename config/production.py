import os

from .config import Config, DB_CONFIG

API_URL = Config.API_URL
API_TIMEOUT = Config.API_TIMEOUT
DATA_DIR = Config.DATA_DIR
API_PREFIX = Config.API_PREFIX

DB_CONFIG = dict(DB_CONFIG)

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
