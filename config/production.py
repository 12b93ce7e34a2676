import os

from config.config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = dict(DB_CONFIG)

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB

PHOTO_UPLOAD_DIR = Config.PHOTO_UPLOAD_DIR
PHOTO_PUBLIC_BASE_URL = Config.PHOTO_PUBLIC_BASE_URL
GEOCODER_URL = Config.GEOCODER_URL
GEOCODER_TIMEOUT = Config.GEOCODER_TIMEOUT
SESSION_CHECK_INTERVAL = Config.SESSION_CHECK_INTERVAL
