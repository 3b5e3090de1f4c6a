import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Morphological tokenizer
    TOKENIZER: Literal["mecab", "dummy"] = "mecab"
    MECAB_DIC_DIR: Optional[str] = None  # MeCab -d; default dictionary when unset

    # Chunking / chaining
    CHUNK_SIZE: int = Field(default=2, ge=1)  # window size K
    MAX_MATCH_LENGTH: int = Field(default=1, ge=1)  # upper bound of key width draw
    MAX_STEPS: int = Field(default=50, ge=1)  # step budget per chain

    # Validation / retry
    MAX_ATTEMPTS: int = Field(default=500, ge=1)
    MIN_RESULT_LENGTH: int = Field(default=5, ge=0)
    MIN_CHUNKS_MAX: int = Field(default=7, ge=1)  # minimum chunks drawn from [1, N]

    RANDOM_SEED: Optional[int] = None

    # Observability
    LOG_FORMAT: Literal["json", "plain", "auto"] = "auto"
    LOG_LEVEL: str = "info"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        if config_file:
            config_path: Optional[Path] = Path(config_file)
        else:
            # Auto-discover .textmaker.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".textmaker.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)
        elif config_file:
            raise FileNotFoundError(f"Config file not found: {config_file}")

        # File values are the lowest-priority source; environment overrides them
        return cls(**_without_env_overrides(config_data))


def _without_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    data = {str(k).upper(): v for k, v in config_data.items()}
    return {k: v for k, v in data.items() if k not in os.environ}
