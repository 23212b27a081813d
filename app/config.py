from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    auth_jwt_secret: str
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: str | None = None  # not checked when unset
    auth_email_claim: str = "email"
    app_env: str = "development"  # development, staging, production

    # Bedrock LLM for resume analysis
    aws_region: str = "us-west-2"
    bedrock_llm_model_id: str = "amazon.nova-lite-v1:0"
    llm_max_tokens: int = 4096
    llm_temperature: float = 0.2

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Upper bound for a single analysis request (download + model call)
    request_timeout_seconds: int = 60
    max_resume_download_mb: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
