# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(..., validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(..., validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Pipeline tunables
    OCR_CONFIDENCE_THRESHOLD: float = Field(
        default=0.5, ge=0.0, le=1.0, validation_alias="OCR_CONFIDENCE_THRESHOLD"
    )
    DUPLICATE_THRESHOLD: float = Field(
        default=0.82, ge=0.0, le=1.0, validation_alias="DUPLICATE_THRESHOLD"
    )
    DUPLICATE_MIN_LENGTH: int = Field(
        default=0, ge=0, validation_alias="DUPLICATE_MIN_LENGTH"
    )

    # Boundary guards
    MAX_LINE_CHARS: int = Field(default=4000, validation_alias="MAX_LINE_CHARS")
    MAX_BATCH_LINES: int = Field(default=5000, validation_alias="MAX_BATCH_LINES")
    MAX_CANDIDATES: int = Field(default=2000, validation_alias="MAX_CANDIDATES")
    MAX_ISSUES: int = Field(default=1000, validation_alias="MAX_ISSUES")

    # Logging knobs
    LOGGER_NAME: str = "reqlens"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
