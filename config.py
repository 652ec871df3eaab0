from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    telegram_bot_token: str

    llm_provider: str = "openai"  # anthropic | openai | custom

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-opus-4-6"

    # OpenAI / custom
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_base_url: str = "https://api.openai.com/v1"

    # Webhook (optional — leave empty to use polling)
    # Telegram only allows ports: 80, 88, 443, 8443
    webhook_url: str = ""
    webhook_secret: str = ""
    webhook_port: int = 8443
    webhook_listen: str = "0.0.0.0"

    # Storage
    db_path: str = "~/.hook_forge/hooks.db"
    users_config: str = "config/users.json"

    # Candidate corpus (empty = packaged agent/data/*.json)
    templates_path: str = ""
    power_hooks_path: str = ""

    # Markdown style profile injected into hook and thread prompts
    tone_profile_path: str = "config/tonal.md"

    # Hook generation
    template_limit: int = Field(default=5, ge=1)
    power_hook_limit: int = Field(default=8, ge=1)
    custom_hook_count: int = Field(default=2, ge=0)
    max_hooks: int = Field(default=10, ge=1)
    hook_min_chars: int = Field(default=140, ge=1)
    hook_max_chars: int = Field(default=279, ge=1)
    hook_attempts: int = Field(default=3, ge=1)

    # Content bounds
    content_min_chars: int = Field(default=10, ge=1)
    content_max_chars: int = Field(default=10_000, ge=1)

    # Rate limit
    rate_limit_window_seconds: int = Field(default=60, ge=1)
    rate_limit_hooks_per_window: int = Field(default=4, ge=1)
    rate_limit_thread_per_window: int = Field(default=6, ge=1)
    rate_limit_rewrite_per_window: int = Field(default=20, ge=1)

    log_level: str = "INFO"


settings = Settings()
