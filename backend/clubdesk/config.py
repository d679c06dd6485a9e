import os
from dotenv import load_dotenv


load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///clubdesk.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", 10))  # applied to every engine
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_ENABLED = True
    AUDIT_LOG_FILE = os.getenv("AUDIT_LOG_FILE", os.path.join("logs", "audit.log"))
    FLASK_ENV = os.getenv("FLASK_ENV", "development")
    JSON_AS_ASCII = False

    # Fallbacks used when the settings table has no usable value
    DEFAULT_DAILY_RATE = 2000
    DEFAULT_BIKE_RENTAL_FEE = 5000


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    RATELIMIT_ENABLED = False
