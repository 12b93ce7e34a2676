import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "committee_portal_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

PHOTO_UPLOAD_DIR = os.getenv("PHOTO_UPLOAD_DIR", "/tmp/committee-portal-photos")
PHOTO_PUBLIC_BASE_URL = "/attendance-photos"
GEOCODER_URL = "http://localhost/reverse"
GEOCODER_TIMEOUT = 1.0
SESSION_CHECK_INTERVAL = 10
