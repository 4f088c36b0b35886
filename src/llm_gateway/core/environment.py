"""
Same-origin relay URL rewriting.

When a model configuration asks for the relay and the runtime has a
relay origin configured, vendor URLs are rewritten to
``{origin}/api/{proxy|stream}?targetUrl=<quoted target>``. The relay is
a transparent forwarder; only the transport endpoint changes.
"""

import logging
import os
from typing import Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)

RELAY_ORIGIN_ENV = "LLM_GATEWAY_RELAY_ORIGIN"


def get_relay_origin() -> Optional[str]:
    """Relay origin for this runtime, or None when no relay is available."""
    origin = os.getenv(RELAY_ORIGIN_ENV, "").strip()
    return origin.rstrip("/") or None


def is_relay_available() -> bool:
    return get_relay_origin() is not None


def get_proxy_url(target_url: str, streaming: bool = False, origin: Optional[str] = None) -> str:
    """
    Build the relay URL for a vendor target URL.

    Args:
        target_url: Absolute vendor URL
        streaming: Use the streaming relay endpoint
        origin: Relay origin; read from the environment when omitted

    Returns:
        Relay URL, or an empty string for an empty target
    """
    if not target_url:
        return ""
    origin = origin if origin is not None else (get_relay_origin() or "")
    endpoint = "stream" if streaming else "proxy"
    return f"{origin}/api/{endpoint}?targetUrl={quote(target_url, safe='')}"


def resolve_url(
    base_url: str,
    path: str,
    use_proxy: bool = False,
    streaming: bool = False,
) -> str:
    """
    Join a vendor base URL and path, routing through the relay if enabled.

    Args:
        base_url: Vendor base URL
        path: Endpoint path, may carry a query string
        use_proxy: The configuration's relay flag
        streaming: Whether the request is a streaming request

    Returns:
        URL to send the request to
    """
    target = f"{base_url.rstrip('/')}{path}"
    origin = get_relay_origin()
    if use_proxy and origin:
        relayed = get_proxy_url(target, streaming=streaming, origin=origin)
        logger.debug(f"Routing {'stream ' if streaming else ''}request through relay {origin}")
        return relayed
    return target
