import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from shared_utils.exceptions import ConfigurationError

from . import constants


class ServiceConfig(BaseModel):
    """Process-wide settings, read once at cold start and never mutated."""
    model_config = ConfigDict(frozen=True)

    gemini_api_key: SecretStr
    model_name: str = constants.DEFAULT_MODEL_NAME
    temperature: float = Field(default=constants.DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    default_mime_type: str = constants.DEFAULT_VIDEO_MIME_TYPE
    max_video_bytes: int = Field(default=constants.DEFAULT_MAX_VIDEO_BYTES, gt=0)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        environ = os.environ if environ is None else environ

        api_key = environ.get("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set in environment variables.")

        values = {
            "gemini_api_key": api_key,
        }
        optional = {
            "model_name": "GEMINI_MODEL",
            "temperature": "GEMINI_TEMPERATURE",
            "default_mime_type": "DEFAULT_VIDEO_MIME_TYPE",
            "max_video_bytes": "MAX_VIDEO_BYTES",
        }
        for field, env_name in optional.items():
            value = environ.get(env_name)
            if value:
                values[field] = value

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid service configuration: {e}") from e
