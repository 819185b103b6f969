"""
Core configuration and settings for the Resource Service
Following FastAPI best practices for configuration management
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields to be ignored
    )

    # Service information
    service_name: str = Field(default="resource-service")
    service_version: str = Field(default="1.0.0")
    service_description: str = Field(default="Resource lifecycle microservice")
    environment: str = Field(default="development")

    # Server configuration
    port: int = Field(default=8080)
    host: str = Field(default="0.0.0.0")

    # Persistence: "mongodb" or "memory"
    store_backend: str = Field(default="mongodb")

    # Database configuration
    mongodb_host: str = Field(default="localhost")
    mongodb_port: int = Field(default=27017)
    mongodb_username: Optional[str] = Field(default=None)
    mongodb_password: Optional[str] = Field(default=None)
    mongodb_database: str = Field(default="resourcedb")
    mongodb_collection: str = Field(default="resources")

    @property
    def mongodb_url(self) -> str:
        """Construct MongoDB connection URL"""
        if self.mongodb_username and self.mongodb_password:
            return (
                f"mongodb://{self.mongodb_username}:{self.mongodb_password}"
                f"@{self.mongodb_host}:{self.mongodb_port}/{self.mongodb_database}?authSource=admin"
            )
        return f"mongodb://{self.mongodb_host}:{self.mongodb_port}/{self.mongodb_database}"

    # Read cache
    cache_max_size: int = Field(default=1024, ge=1)

    # Eventing: "dapr" or "log"
    event_channel: str = Field(default="dapr")
    dapr_http_port: int = Field(default=3500)
    dapr_pubsub_name: str = Field(default="resource-pubsub")
    events_topic: str = Field(default="resource.events")
    publish_timeout: float = Field(default=5.0)
    processed_events_max_size: int = Field(default=10000, ge=1)

    # Logging configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    # Request tracing
    correlation_id_header: str = Field(default="X-Correlation-ID")

    @property
    def dapr_url(self) -> str:
        return f"http://localhost:{self.dapr_http_port}"


# Global config instance
config = Config()
