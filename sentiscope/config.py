from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    """Runtime configuration with sensible defaults for local development."""

    hf_api_key: str | None = Field(
        default=os.getenv("HF_API_KEY") or os.getenv("HUGGING_FACE_ACCESS_TOKEN"),
        description="Hugging Face Inference API token.",
    )
    sentiment_model: str = Field(
        default=os.getenv(
            "HF_SENTIMENT_MODEL", "cardiffnlp/twitter-roberta-base-sentiment-latest"
        ),
        description="Hugging Face sentiment model repo.",
    )
    hf_api_url: str = Field(
        default=os.getenv(
            "HF_API_URL", "https://router.huggingface.co/hf-inference/models"
        ),
        description="Base URL of the inference endpoint; the model id is appended.",
    )
    hf_timeout_seconds: float = Field(
        default=float(os.getenv("HF_TIMEOUT_SECONDS", "15")),
        description="Upper bound for a single remote classification call.",
    )
    hf_max_input_chars: int = Field(
        default=int(os.getenv("HF_MAX_INPUT_CHARS", "512")),
        description="Characters of input forwarded to the remote model.",
    )
    remote_enabled: bool = Field(
        default=os.getenv("REMOTE_SENTIMENT_ENABLED", "true").lower() == "true",
        description="When false, only the local lexicon scorer is used.",
    )
    batch_delay_seconds: float = Field(
        default=float(os.getenv("BATCH_DELAY_SECONDS", "0.1")),
        description="Pause between sequential batch items.",
    )
    batch_concurrency: int = Field(
        default=int(os.getenv("BATCH_CONCURRENCY", "1")),
        description="Maximum number of batch items analyzed at once.",
    )
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv(
                "CORS_ALLOW_ORIGINS", "http://localhost:5173"
            ).split(",")
            if origin.strip()
        ],
        description="Comma separated list of allowed origins.",
    )
    log_level: str = Field(
        default=os.getenv("LOG_LEVEL", "INFO").upper(),
        description="Root logging level.",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
