"""
Vector database boundary layer.

Provides the content vector store used for CMS mirroring and chat retrieval.

Dependencies: langchain_core
System role: Vector store adapter for RAG retrieval
"""

from concierge.boundary.vdb.content_vector_store import ContentVectorStore

__all__ = ["ContentVectorStore"]
