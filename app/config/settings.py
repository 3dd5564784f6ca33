from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Bypasses RLS; ownership is then checked in the service layer

    # Resume storage
    resume_storage_backend: str = "supabase"  # supabase | s3
    resumes_bucket: str = "resumes"
    max_resume_size_bytes: int = 10 * 1024 * 1024
    resume_cache_control: str = "3600"
    delete_replaced_resumes: bool = False

    # AWS S3 (will read from uppercase env vars automatically)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None

    # App
    app_name: str = "profile-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    login_redirect_path: str = "/auth/login"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uses_s3_storage(self) -> bool:
        return self.resume_storage_backend.lower() == "s3"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
