"""Environment-backed settings"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return (
        f"postgresql+asyncpg://{os.getenv('DB_USER')}:{os.getenv('DB_PASSWORD')}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}/{os.getenv('DB_NAME')}"
    )


DATABASE_URL = _database_url()
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

IDENTITY_JWKS_URL = os.getenv("IDENTITY_JWKS_URL", "")
IDENTITY_ISSUER = os.getenv("IDENTITY_ISSUER", "")
IDENTITY_AUDIENCE = os.getenv("IDENTITY_AUDIENCE") or None
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "RS256")

PERMISSIONS_FILE = os.getenv(
    "PERMISSIONS_FILE",
    str(Path(__file__).parent.parent / "permissions.yml"),
)

DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
APP_ENV = os.getenv("APP_ENV", "production")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
DB_CREATE_TABLES = os.getenv("DB_CREATE_TABLES", "false").lower() == "true"
