"""
Vector store factory for selecting between in-memory and FAISS backends.

Depends on VECTOR_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: langchain_core, langchain_community, langchain_google_genai, faiss-cpu
System role: Vector store instantiation and selection
"""

import logging
from pathlib import Path

from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore, VectorStore

from concierge.boundary.vdb.content_vector_store import ContentVectorStore
from concierge.configs import get_settings
from concierge.configs.vector_store import VectorStoreSettings
from concierge.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def build_embeddings(settings: VectorStoreSettings) -> Embeddings:
    """Create the Google Gemini embedding model."""
    from langchain_google_genai import GoogleGenerativeAIEmbeddings

    if not settings.google_api_key:
        raise ConfigurationError(
            "VECTOR_STORE_GOOGLE_API_KEY is not configured",
            "VECTOR_STORE_GOOGLE_API_KEY",
        )
    return GoogleGenerativeAIEmbeddings(
        model=settings.embedding_model,
        google_api_key=settings.google_api_key,
    )


def _memory_store(settings: VectorStoreSettings, embeddings: Embeddings) -> ContentVectorStore:
    path = Path(settings.persist_path) if settings.persist_path else None
    if path is not None and path.exists():
        logger.info(f"{__name__}:_memory_store - Loading in-memory index from {path}")
        store = InMemoryVectorStore.load(str(path), embeddings)
    else:
        store = InMemoryVectorStore(embeddings)

    def persist(vector_store: VectorStore) -> None:
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            vector_store.dump(str(path))

    return ContentVectorStore(store, persist=persist if path is not None else None)


def _faiss_store(settings: VectorStoreSettings, embeddings: Embeddings) -> ContentVectorStore:
    import faiss
    from langchain_community.docstore.in_memory import InMemoryDocstore
    from langchain_community.vectorstores import FAISS
    from langchain_community.vectorstores.utils import DistanceStrategy

    index_dir = Path(settings.persist_path or "/tmp/.faiss_content_index")
    index_dir.mkdir(parents=True, exist_ok=True)

    try:
        store = FAISS.load_local(
            str(index_dir),
            embeddings,
            index_name=settings.index_name,
            allow_dangerous_deserialization=True,
        )
        logger.info(f"{__name__}:_faiss_store - Loaded FAISS index from {index_dir}")
    except (FileNotFoundError, RuntimeError) as e:
        logger.info(f"{__name__}:_faiss_store - No index loaded ({type(e).__name__}), creating new one")
        dimension = len(embeddings.embed_query("dimension probe"))
        # Inner product over normalized vectors gives cosine similarity scores
        store = FAISS(
            embedding_function=embeddings,
            index=faiss.IndexFlatIP(dimension),
            docstore=InMemoryDocstore(),
            index_to_docstore_id={},
            normalize_L2=True,
            distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
        )

    def persist(vector_store: VectorStore) -> None:
        vector_store.save_local(str(index_dir), index_name=settings.index_name)

    return ContentVectorStore(store, persist=persist)


def get_vector_store(embeddings: Embeddings | None = None) -> ContentVectorStore:
    """
    Factory function to get vector store based on environment configuration.

    Args:
        embeddings: Optional embedding model override

    Returns:
        ContentVectorStore: Configured vector store instance

    Raises:
        ValueError: If VECTOR_STORE_TYPE is invalid
    """
    settings = get_settings().vector_store
    store_type = settings.store_type.lower()
    embeddings = embeddings or build_embeddings(settings)

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_store - Creating in-memory vector store")
        return _memory_store(settings, embeddings)

    elif store_type == "faiss":
        logger.info(f"{__name__}:get_vector_store - Creating FAISS vector store")
        return _faiss_store(settings, embeddings)

    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_TYPE: {store_type}. Must be 'memory' or 'faiss'."
        )
