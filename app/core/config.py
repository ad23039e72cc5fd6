from typing import Annotated, Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env.production", ".env"),
        case_sensitive=False,
        extra="allow",
    )

    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Database
    database_url: Optional[str] = None
    postgres_host: Optional[str] = None
    postgres_port: Optional[int] = None
    postgres_user: Optional[str] = None
    postgres_password: Optional[str] = None
    postgres_db: Optional[str] = None
    postgres_ssl: Optional[bool] = True
    cloud_sql_connection_name: Optional[str] = None

    # Mail
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None
    smtp_starttls: bool = True
    smtp_timeout: float = 30.0
    smtp_from: str = "noreply@deaneeth.dev"
    owner_email: str = "hello@deaneeth.dev"
    contact_email: Optional[str] = None
    owner_name: str = "Deaneeth"
    owner_title: str = "AI/ML Explorer & Creative Technologist"
    owner_whatsapp: Optional[str] = None
    owner_linkedin: Optional[str] = "linkedin.com/in/deaneeth"

    # CORS
    cors_origins: Annotated[List[str], NoDecode] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        """Accept CORS_ORIGINS as a comma-separated string."""
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

    @property
    def contact_recipient(self) -> str:
        return self.contact_email or self.owner_email

    def build_db_url(self) -> Optional[str]:
        if self.database_url:
            return self.database_url

        if not self.postgres_db:
            return None

        user = self.postgres_user or ""
        password = self.postgres_password or ""

        # Cloud SQL with Unix socket
        if self.cloud_sql_connection_name:
            host_path = f"/cloudsql/{self.cloud_sql_connection_name}"
            return f"postgresql://{user}:{password}@/{self.postgres_db}?host={host_path}"

        host = self.postgres_host or "127.0.0.1"
        port = self.postgres_port or 5432
        return f"postgresql://{user}:{password}@{host}:{port}/{self.postgres_db}"


settings = Settings()
