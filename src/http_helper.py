# HTTP Helper for Hue Connections
# Session configuration for the cloud discovery portal (HTTPS) and local bridges (HTTP)

import aiohttp
import ssl
import logging

logger = logging.getLogger(__name__)

def create_bridge_session(timeout_seconds: float = 5) -> aiohttp.ClientSession:
    """
    Create properly configured aiohttp session for local bridge connections (always HTTP)
    Bridges only serve a handful of concurrent requests, so keep the pool small
    """
    connector = aiohttp.TCPConnector(
        limit_per_host=2,           # Max 2 connections per bridge IP
        ssl=False,                  # Local bridge API is plain HTTP
        force_close=True,           # Force connection cleanup
        enable_cleanup_closed=True  # Additional cleanup
    )

    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=timeout_seconds)
    )

def create_portal_session(timeout_seconds: float = 5) -> aiohttp.ClientSession:
    """
    Create aiohttp session for the cloud discovery portal
    Always HTTPS with certificate verification
    """
    ssl_context = ssl.create_default_context()
    ssl_context.check_hostname = True
    ssl_context.verify_mode = ssl.CERT_REQUIRED

    connector = aiohttp.TCPConnector(
        ssl=ssl_context,
        limit=2,
        force_close=True,
        enable_cleanup_closed=True
    )

    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=timeout_seconds)
    )
