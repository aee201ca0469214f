"""
Boundary layer for external system integrations.

Handles all interactions with external systems (CMS, key-value store,
vector store, recordkeeping API). Provides adapters and clients for
infrastructure dependencies.
"""
