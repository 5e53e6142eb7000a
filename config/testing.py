import os
import tempfile

# Tests never talk to a remote API unless they wire one explicitly.
API_URL = ""
API_TIMEOUT = 2.0
DATA_DIR = os.getenv("DATA_DIR", os.path.join(tempfile.gettempdir(), "absence_tracker_test"))
API_PREFIX = "/api"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absence_tracker_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
