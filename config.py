import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    # No default: issuing a session token without a secret is a deployment error
    JWT_SECRET = data.get("JWT_SECRET")
    JWT_EXPIRY_DAYS = int(data.get("JWT_EXPIRY_DAYS", 7))
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 6))
    PASSWORD_HASH_ITERATIONS = int(data.get("PASSWORD_HASH_ITERATIONS", 100_000))
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 30))
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:8000")
    EMAIL_API_URL = data.get("EMAIL_API_URL", "https://api.resend.com/emails")
    EMAIL_API_KEY = data.get("EMAIL_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "no-reply@localhost")
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 10))
