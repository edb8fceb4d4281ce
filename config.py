"""Socialia configuration — loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- LLM provider --------------------------------------------------
    llm_provider: str = "groq"  # "groq" | "openai" | "azure" | "local"

    # Groq (OpenAI-compatible endpoint)
    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model: str = "llama-3.3-70b-versatile"
    groq_judge_model: str = "openai/gpt-oss-20b"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_judge_model: str = "gpt-4o-mini"

    # Azure OpenAI
    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_deployment: str = ""
    azure_openai_judge_deployment: str = ""

    # Local / Ollama
    local_llm_base_url: str = "http://localhost:11434/v1"
    local_llm_model: str = "llama3"
    local_judge_model: str = "llama3"

    # --- Hashnode -------------------------------------------------------
    hashnode_api_url: str = "https://gql.hashnode.com"
    hashnode_timeout_sec: float = 15.0

    # --- Server ---------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    internal_token: str = ""  # shared secret for callers of the POST routes
    allowed_origins: str = "*"  # comma-separated origins, e.g. "http://localhost:3000,https://app.example.com"

    # --- Agent & scoring ------------------------------------------------
    max_content_chars: int = 10_000
    max_tool_rounds: int = 3
    agent_temperature: float = 0.3
    judge_temperature: float = 0.1


settings = Settings()
