import os
import tempfile
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError

from errors import ConfigurationError
from models.evaluation_model import SchemaVariant

# ✅ Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL_NAME = "gemini-2.0-flash"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    api_key: str
    model_name: str = DEFAULT_MODEL_NAME
    host: str = "0.0.0.0"
    port: PositiveInt = 3000
    schema_variant: SchemaVariant = SchemaVariant.BASIC
    model_timeout_ms: PositiveInt = 45000
    max_concurrent_model_calls: PositiveInt = 4
    upload_dir: str = tempfile.gettempdir()
    result_log_path: Optional[str] = None
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    @property
    def model_timeout_seconds(self) -> float:
        return self.model_timeout_ms / 1000


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"❌ {name} must be an integer, got {raw!r}.")


def load_settings() -> Settings:
    """Build Settings from the environment, failing fast on anything unusable."""
    api_key = os.getenv("API_KEY") or os.getenv("GOOGLE_API_KEY")

    # ✅ Raise error if API_KEY is missing
    if not api_key:
        raise ConfigurationError("❌ API_KEY not found in environment. Please set it in your .env.")

    variant_name = (os.getenv("SCHEMA_VARIANT") or SchemaVariant.BASIC.value).strip().lower()
    try:
        schema_variant = SchemaVariant(variant_name)
    except ValueError:
        allowed = ", ".join(v.value for v in SchemaVariant)
        raise ConfigurationError(f"❌ SCHEMA_VARIANT must be one of: {allowed}. Got {variant_name!r}.")

    upload_dir = os.getenv("UPLOAD_DIR") or tempfile.gettempdir()
    if not os.path.isdir(upload_dir):
        raise ConfigurationError(f"❌ UPLOAD_DIR {upload_dir!r} does not exist or is not a directory.")

    log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"❌ LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}. Got {log_level!r}.")

    origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    try:
        return Settings(
            api_key=api_key,
            model_name=os.getenv("MODEL_NAME") or DEFAULT_MODEL_NAME,
            host=os.getenv("HOST") or "0.0.0.0",
            port=_env_int("PORT", 3000),
            schema_variant=schema_variant,
            model_timeout_ms=_env_int("MODEL_TIMEOUT_MS", 45000),
            max_concurrent_model_calls=_env_int("MAX_CONCURRENT_MODEL_CALLS", 4),
            upload_dir=upload_dir,
            result_log_path=os.getenv("RESULT_LOG_PATH") or None,
            log_level=log_level,
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
    except ValidationError as e:
        # Field names match their environment variables, upper-cased
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"❌ Invalid configuration: {problems}") from e
