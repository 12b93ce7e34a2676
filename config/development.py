import os

from config.config import DB_CONFIG, Config

SECRET_KEY = Config.SECRET_KEY

DB_CONFIG = dict(DB_CONFIG)

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = Config.AUTO_SEED_DB

PHOTO_UPLOAD_DIR = Config.PHOTO_UPLOAD_DIR
PHOTO_PUBLIC_BASE_URL = Config.PHOTO_PUBLIC_BASE_URL
GEOCODER_URL = Config.GEOCODER_URL
GEOCODER_TIMEOUT = Config.GEOCODER_TIMEOUT
SESSION_CHECK_INTERVAL = Config.SESSION_CHECK_INTERVAL
