from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Any
import json
from pathlib import Path


def parse_csv_list(v: Any) -> List[str]:
    """Parse a list setting from a JSON array or a comma-separated string"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [item.strip() for item in v.split(',') if item.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "PromptIDE"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_PREFIX: str = "/api"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3000
    MAX_REQUEST_BYTES: int = 10 * 1024 * 1024  # 10MB, same as the JSON body limit

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "*"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_csv_list(self.CORS_ORIGINS_STR)

    # ==========================================
    # File Store (persistence service)
    # ==========================================
    WORKSPACE_ROOT: str = "./workspace"
    # Directory names never returned by the listing (dot-names are always skipped)
    LIST_SKIP_NAMES_STR: str = "node_modules,server,temp-projects"

    @property
    def LIST_SKIP_NAMES(self) -> List[str]:
        return parse_csv_list(self.LIST_SKIP_NAMES_STR)

    @property
    def WORKSPACE_DIR(self) -> Path:
        return Path(self.WORKSPACE_ROOT)

    # Client side of the store
    FILE_STORE_URL: str = "http://localhost:3000/api"
    HTTP_CONNECT_TIMEOUT: float = 10.0
    HTTP_REQUEST_TIMEOUT: float = 30.0

    # ==========================================
    # Generation
    # ==========================================
    CLASSIFIER_MODE: str = "template"  # "template", "remote" or "claude"
    GENERATION_TIMEOUT_SECONDS: float = 60.0
    DEFAULT_PROJECT_NAME: str = "My Project"

    # ==========================================
    # Claude AI (only used when CLASSIFIER_MODE=claude)
    # ==========================================
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_BASE_URL: str = ""  # Empty means use default Anthropic URL
    CLAUDE_MODEL: str = "claude-sonnet-4-20250514"
    CLAUDE_MAX_TOKENS: int = 4096
    CLAUDE_TEMPERATURE: float = 0.7
    CLAUDE_REQUEST_TIMEOUT: int = 120
    CLAUDE_CONNECT_TIMEOUT: int = 30

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    @field_validator("CLASSIFIER_MODE")
    @classmethod
    def _check_classifier_mode(cls, v: str) -> str:
        mode = v.strip().lower()
        if mode not in ("template", "remote", "claude"):
            raise ValueError(f"Unsupported CLASSIFIER_MODE: {v}")
        return mode

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Create settings instance
settings = Settings()
