"""
CMS boundary layer.

Read-only access to the Sanity content API.
"""

from concierge.boundary.cms.sanity_client import SanityClient

__all__ = ["SanityClient"]
