"""
Recordkeeping configuration settings.

Notion database connection and property names used by the transcript
exporter.

Dependencies: pydantic, pydantic_settings
System role: Transcript export configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class NotionSettings(BaseSettings):
    """Notion export configuration."""

    api_token: str | None = Field(default=None, description="Notion integration token")
    database_id: str | None = Field(default=None, description="Target Notion database ID")

    date_property: str = Field(default="Date")
    time_property: str = Field(default="Time")
    query_property: str = Field(default="Query")
    response_property: str = Field(default="Response")
    processing_time_property: str = Field(default="Processing Time")
    client_property: str = Field(default="Client")
    location_property: str = Field(default="Location")
    contact_property: str = Field(default="Email")
    status_property: str = Field(default="Status")
    status_complete: str = Field(default="Complete")

    pause_every: int = Field(default=2, description="Pause after this many successful creates")
    pause_seconds: float = Field(default=1.0, description="Pause length between create bursts")

    class Config:
        """Pydantic config."""

        env_prefix = "NOTION_"
        case_sensitive = False


class AdminSettings(BaseSettings):
    """Admin route protection."""

    sync_token: str | None = Field(
        default=None,
        description="Bearer token required by admin sync/export routes",
    )

    class Config:
        """Pydantic config."""

        env_prefix = "ADMIN_"
        case_sensitive = False
