"""Configuration management for the survey analyzer."""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

from ..utils.validators import validate_required_settings


@dataclass
class Settings:
    """Configuration settings for the survey analyzer."""

    # Core Azure OpenAI (required)
    azure_openai_api_key: str
    azure_openai_endpoint: str
    azure_openai_deployment_name: str = "gpt-4o"
    azure_api_version: str = "2024-10-21"

    # Analysis request settings
    api_temperature: float = 0.4
    max_tokens: int = 8000
    context_token_limit: int = 120000

    # OpenAI client settings
    openai_max_retries: int = 3
    openai_timeout: int = 120
    backoff_max_time: int = 60

    # Data processing settings
    data_encoding: str = "utf-8"
    encoding_fallbacks: list = None
    default_layout: str = "rows_are_questions"

    # Output settings
    output_dir: str = "output"

    def __post_init__(self):
        """Initialize derived settings after object creation."""
        if self.encoding_fallbacks is None:
            self.encoding_fallbacks = [self.data_encoding, 'utf-8-sig', 'gb18030', 'latin-1']

    @classmethod
    def from_env(cls, env_file: str = None) -> "Settings":
        """Create settings from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            azure_openai_api_key=os.getenv("AZURE_OPENAI_API_KEY", ""),
            azure_openai_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT", ""),
            azure_openai_deployment_name=os.getenv("AZURE_OPENAI_DEPLOYMENT_NAME", "gpt-4o"),
            azure_api_version=os.getenv("AZURE_API_VERSION", "2024-10-21"),
            api_temperature=float(os.getenv("API_TEMPERATURE", "0.4")),
            max_tokens=int(os.getenv("MAX_TOKENS", "8000")),
            context_token_limit=int(os.getenv("CONTEXT_TOKEN_LIMIT", "120000")),
            openai_max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "3")),
            openai_timeout=int(os.getenv("OPENAI_TIMEOUT", "120")),
            backoff_max_time=int(os.getenv("BACKOFF_MAX_TIME", "60")),
            data_encoding=os.getenv("DATA_ENCODING", "utf-8"),
            default_layout=os.getenv("DEFAULT_LAYOUT", "rows_are_questions"),
            output_dir=os.getenv("OUTPUT_DIR", "output")
        )

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = validate_required_settings(
            self.azure_openai_api_key,
            self.azure_openai_endpoint,
            self.azure_openai_deployment_name
        )
        if errors:
            raise ValueError("; ".join(errors))

        if self.openai_max_retries < 1:
            raise ValueError(f"OPENAI_MAX_RETRIES must be at least 1, got {self.openai_max_retries}")

        if self.default_layout not in ("rows_are_questions", "rows_are_users"):
            raise ValueError(f"DEFAULT_LAYOUT must be rows_are_questions or rows_are_users, got {self.default_layout}")
