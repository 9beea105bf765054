from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional


class Settings:
    """Centralized configuration for the calorie gateway and the logging client."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        # ---- Completion service ----
        self.openai_base_url: str = os.environ.get(
            "OPENAI_BASE_URL", "https://api.openai.com/v1"
        )
        self.openai_model: str = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")
        self.llm_temperature: float = float(
            os.environ.get("FITLOG_LLM_TEMPERATURE") or "0.7"
        )
        # Unset means the completion call waits as long as the upstream takes.
        timeout_raw = (os.environ.get("FITLOG_LLM_TIMEOUT") or "").strip()
        self.llm_timeout: Optional[float] = float(timeout_raw) if timeout_raw else None
        self.api_key_prefix: str = "sk-"

        # ---- Client ----
        self.data_root: Path = Path(
            os.environ.get("FITLOG_DATA_ROOT") or data_root_default
        ).expanduser()
        self.api_url: str = os.environ.get("FITLOG_API_URL", "http://127.0.0.1:8000")

        # ---- Server ----
        self.host: str = os.environ.get("FITLOG_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("FITLOG_PORT") or "8000")
        self.log_level: str = (os.environ.get("FITLOG_LOG_LEVEL") or "INFO").upper()

        cors = os.environ.get("FITLOG_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]

    @property
    def openai_api_key(self) -> Optional[str]:
        # Read on every access so a rotated key is picked up without a restart.
        return os.environ.get("OPENAI_API_KEY")


settings = Settings()
