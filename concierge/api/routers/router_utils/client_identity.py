"""
Client identity extraction.

Dependencies: fastapi
System role: Router helper for rate-limit keys and log attribution
"""

from fastapi import Request


def get_client_identity(request: Request) -> str:
    """
    Resolve the visitor's identity from proxy headers.

    Order: first X-Forwarded-For hop, X-Real-IP, peer host, "unknown".
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"
