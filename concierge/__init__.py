"""
Concierge backend.

Retrieval-grounded chat assistant for a CMS-driven site.
"""
