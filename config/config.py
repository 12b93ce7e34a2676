import os


class Config:
    """Shared defaults; the per-environment modules override what they need."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "committee-portal-dev-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "committee_portal")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))

    PHOTO_UPLOAD_DIR = os.environ.get("PHOTO_UPLOAD_DIR", "uploads/attendance-photos")
    PHOTO_PUBLIC_BASE_URL = os.environ.get("PHOTO_PUBLIC_BASE_URL", "/attendance-photos")

    GEOCODER_URL = os.environ.get("GEOCODER_URL", "https://nominatim.openstreetmap.org/reverse")
    GEOCODER_TIMEOUT = float(os.environ.get("GEOCODER_TIMEOUT", "5"))

    # Seconds between server-side session token checks
    SESSION_CHECK_INTERVAL = int(os.environ.get("SESSION_CHECK_INTERVAL", "10"))


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
