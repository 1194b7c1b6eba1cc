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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./account_security.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")

    # Fernet key (32 url-safe base64 bytes). Replace outside development.
    ENCRYPTION_KEY = data.get(
        "ENCRYPTION_KEY", "YWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWE="
    )
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # Sessions (None = non-expiring until revoked)
    SESSION_LIFETIME_DAYS = data.get("SESSION_LIFETIME_DAYS", 30)

    # Brute-force lockout
    LOCKOUT_MAX_ATTEMPTS = int(data.get("LOCKOUT_MAX_ATTEMPTS", 5))
    LOCKOUT_MINUTES = int(data.get("LOCKOUT_MINUTES", 15))

    # Password policy
    PASSWORD_HISTORY_DEPTH = int(data.get("PASSWORD_HISTORY_DEPTH", 5))

    # Ephemeral tokens
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 60))
    VERIFY_TOKEN_TTL_HOURS = int(data.get("VERIFY_TOKEN_TTL_HOURS", 24))

    # Second factor
    TWO_FACTOR_ISSUER = data.get("TWO_FACTOR_ISSUER", "Fleet Platform")
    TWO_FACTOR_CHALLENGE_MINUTES = int(data.get("TWO_FACTOR_CHALLENGE_MINUTES", 5))

    # OAuth
    OAUTH_STATE_MINUTES = int(data.get("OAUTH_STATE_MINUTES", 10))
    OAUTH_PROVIDERS = data.get("OAUTH_PROVIDERS", {})
    DEFAULT_TENANT_NAME = data.get("DEFAULT_TENANT_NAME", "Default")
