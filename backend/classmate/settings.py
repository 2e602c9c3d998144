from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field

class Settings(BaseSettings):
	# Server-held credential; the proxy route is the only reader
	gemini_api_key: str | None = Field(default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"))
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	# Fast tier and pro tier models used by the generators
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	gemini_model_pro: str = Field(default="gemini-2.5-pro", validation_alias="GEMINI_MODEL_PRO")
	gemini_timeout_seconds: float = Field(default=120, validation_alias="GEMINI_TIMEOUT_SECONDS")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")

	# Where the content generators send their model options
	proxy_url: str = Field(default="http://127.0.0.1:8000/api/gemini", validation_alias="PROXY_URL")
	# Must outlast gemini_timeout_seconds so upstream timeouts come back as a 500 body
	proxy_timeout_seconds: float = Field(default=150, validation_alias="PROXY_TIMEOUT_SECONDS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
