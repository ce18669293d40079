from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TransformerSettings(BaseSettings):
    """Process-wide defaults loaded from environment variables with JSONAPI_ prefix."""

    # Document
    api_version: str = ""
    related_url: str = ""
    # Encoding
    indent: int = 4

    model_config = SettingsConfigDict(env_prefix="JSONAPI_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> TransformerSettings:
    """Return cached transformer settings instance."""
    return TransformerSettings()


class TransformerConfig(BaseModel):
    """Caller-supplied document configuration, immutable once built.

    ``meta`` and ``api_version`` feed the top-level ``meta`` and ``jsonapi``
    members. ``relationships`` is static metadata merged into the
    relationship summaries of included resources, and ``related_url`` is the
    fallback for the top-level ``related`` link.
    """

    model_config = ConfigDict(frozen=True)

    meta: Dict[str, Any] = Field(default_factory=dict)
    api_version: str = ""
    relationships: Dict[str, Any] = Field(default_factory=dict)
    related_url: str = ""

    @classmethod
    def from_settings(cls, settings: TransformerSettings | None = None) -> "TransformerConfig":
        settings = settings or get_settings()
        return cls(api_version=settings.api_version, related_url=settings.related_url)

    def with_meta(self, meta: Dict[str, Any]) -> "TransformerConfig":
        return self.model_copy(update={"meta": dict(meta)})

    def with_meta_item(self, key: str, value: Any) -> "TransformerConfig":
        return self.model_copy(update={"meta": {**self.meta, key: value}})

    def with_api_version(self, api_version: str) -> "TransformerConfig":
        return self.model_copy(update={"api_version": api_version})

    def with_relationships(self, relationships: Dict[str, Any]) -> "TransformerConfig":
        return self.model_copy(update={"relationships": dict(relationships)})

    def with_related_url(self, related_url: str) -> "TransformerConfig":
        return self.model_copy(update={"related_url": related_url})
