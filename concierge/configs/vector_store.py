"""
Vector store configuration settings.

Selects the retrieval store backend and embedding model used for
CMS content mirroring and chat retrieval.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for dev, FAISS for persistent local index)."""

    store_type: str = Field(
        default="memory",
        description="Vector store type: 'memory' or 'faiss'",
    )
    persist_path: str | None = Field(
        default=None,
        description="Directory (faiss) or file (memory) used to persist the index",
    )
    index_name: str = Field(default="content", description="Index name for FAISS persistence")

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    google_api_key: str | None = Field(
        default=None,
        description="Google API key for embeddings",
    )

    top_k: int = Field(default=5, description="Number of top results to retrieve for chat")

    class Config:
        """Pydantic config."""

        env_prefix = "VECTOR_STORE_"
        case_sensitive = False
