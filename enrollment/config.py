from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # memory | database
    storage_backend: str = "memory"
    database_url: str = "postgresql://enrollment:enrollment@db:5432/enrollment"
    seed_defaults_on_startup: bool = True

    # Session tokens are Fernet-encrypted; an empty key means one per process
    encryption_key: str = ""
    session_ttl_seconds: int = 86400
    admin_username: str = "admin"
    admin_password: str = "change-me"

    cors_origins: str = "*"
    log_level: str = "INFO"

    # Pusher/Soketi config for broadcasting
    broadcast_enabled: bool = False
    pusher_app_id: str = "100001"
    pusher_app_key: str = "enrollment-key"
    pusher_app_secret: str = "enrollment-secret"
    pusher_host: str = "websocket"
    pusher_port: int = 6001

    # MinIO config for uploaded student documents
    minio_endpoint: str = "http://minio:9000"
    minio_access_key: str = "enrollment"
    minio_secret_key: str = "enrollment-secret-key"
    minio_bucket: str = "enrollment-documents"

    class Config:
        env_file = ".env"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
