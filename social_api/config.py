import os

from dotenv import load_dotenv


load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


class Config:
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret")

    # "fixed" always acts as DEFAULT_USER_ID, "jwt" reads a bearer token first.
    IDENTITY_RESOLVER = os.getenv("IDENTITY_RESOLVER", "fixed").strip().lower()
    DEFAULT_USER_ID = _env_int("DEFAULT_USER_ID", 1)

    MEDIA_UPLOAD_DIR = os.getenv(
        "MEDIA_UPLOAD_DIR",
        os.path.join(os.getcwd(), "uploads"),
    )
    MAX_CONTENT_LENGTH = _env_int("MAX_CONTENT_LENGTH", 10 * 1024 * 1024)

    DEFAULT_PAGE_LIMIT = _env_int("DEFAULT_PAGE_LIMIT", 10)
    MAX_PAGE_LIMIT = _env_int("MAX_PAGE_LIMIT", 100)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    API_TITLE = os.getenv("API_TITLE", "Social API")
    API_VERSION = os.getenv("API_VERSION", "1.0")
    OPENAPI_VERSION = "3.0.3"
