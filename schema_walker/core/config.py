"""
Configuration module for graph-schema-walker.

Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Query timeouts are per query and in seconds:
    - walk_query_timeout_seconds: walk builders (adjacency, property counts, next labels)
    - overview_query_timeout_seconds: whole-graph label and relationship type counts
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # SERVICE CONFIGURATION
    # ===========================================
    schema_walker_port: int = Field(default=8082, description="Service port")

    # ===========================================
    # LOGGING
    # ===========================================
    schema_walker_log_level: str = Field(default="INFO", description="Log level name")
    schema_walker_log_file: str | None = Field(
        default=None,
        description="Optional rotating JSON log file",
    )

    # ===========================================
    # NEO4J CONFIGURATION
    # ===========================================
    neo4j_url: str = Field(
        default="bolt://localhost:7687",
        description="Neo4j Bolt protocol URL",
    )
    neo4j_user: str = Field(default="neo4j", description="Neo4j username")
    neo4j_password: str = Field(
        default="devpassword",
        description="Neo4j password",
    )
    neo4j_database: str = Field(default="neo4j", description="Neo4j database name")

    # ===========================================
    # QUERY TIMEOUTS
    # ===========================================
    walk_query_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for walk builder queries",
    )
    overview_query_timeout_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Timeout for whole-graph overview queries",
    )

    # ===========================================
    # WALK PERSISTENCE
    # ===========================================
    walk_store_path: str = Field(
        default=".walk-store.json",
        description="JSON file holding the persisted walk",
    )
    walk_store_key: str = Field(default="walk", description="Store key for the walk")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
