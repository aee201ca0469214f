"""
Shared router helpers.
"""

from concierge.api.routers.router_utils.client_identity import get_client_identity
from concierge.api.routers.router_utils.error_handling import to_http_exception

__all__ = ["get_client_identity", "to_http_exception"]
