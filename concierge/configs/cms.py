"""
CMS configuration settings.

Connection settings for the Sanity content API used by the content
synchronizer and the public knowledge endpoint.

Dependencies: pydantic, pydantic_settings
System role: CMS read API configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class SanitySettings(BaseSettings):
    """Sanity project configuration."""

    project_id: str = Field(default="", description="Sanity project ID")
    dataset: str = Field(default="production", description="Sanity dataset name")
    api_version: str = Field(default="2024-01-01", description="Sanity API version date")
    token: str | None = Field(default=None, description="Optional read token for private datasets")
    use_cdn: bool = Field(default=True, description="Query the API CDN instead of the live API")
    timeout_seconds: float = Field(default=30.0, description="HTTP timeout for CMS queries")

    class Config:
        """Pydantic config."""

        env_prefix = "SANITY_"
        case_sensitive = False
