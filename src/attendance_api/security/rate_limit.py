"""Rate limiting configuration for security-sensitive endpoints."""

from ipaddress import ip_address, ip_network
from typing import Sequence

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from attendance_api.config import get_settings


def _get_trusted_proxies() -> Sequence[str]:
    """Get list of trusted proxy IP ranges from configuration.

    Returns:
        List of IP addresses or CIDR ranges that are trusted proxies.
    """
    settings = get_settings()

    if settings.trusted_proxies_list:
        return settings.trusted_proxies_list

    # Default: trust localhost and common private ranges for development
    if settings.environment == "development":
        return ["127.0.0.1", "::1", "10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16"]

    # In production, require explicit configuration
    return []


def _is_trusted_proxy(client_ip: str, trusted_proxies: Sequence[str]) -> bool:
    """Check if client IP is from a trusted proxy.

    Args:
        client_ip: The IP address to check.
        trusted_proxies: List of trusted IP addresses or CIDR ranges.

    Returns:
        True if the IP is trusted.
    """
    if not trusted_proxies:
        return False

    try:
        addr = ip_address(client_ip)
        for proxy in trusted_proxies:
            if "/" in proxy:
                # CIDR range
                if addr in ip_network(proxy, strict=False):
                    return True
            else:
                # Single IP
                if addr == ip_address(proxy):
                    return True
    except ValueError:
        # Invalid IP format
        return False

    return False


def get_real_client_ip(request: Request) -> str:
    """Extract real client IP, handling reverse proxy headers securely.

    Only trusts X-Forwarded-For from configured trusted proxies.
    In production, ensure reverse proxy is properly configured.

    Args:
        request: The incoming request object.

    Returns:
        The client IP address.
    """
    direct_ip = get_remote_address(request)
    trusted_proxies = _get_trusted_proxies()

    # Only trust forwarded headers if request comes from a trusted proxy
    if _is_trusted_proxy(direct_ip, trusted_proxies):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # Take the first IP (client IP) from the chain
            client_ip = forwarded_for.split(",")[0].strip()
            # Validate it's a valid IP format
            try:
                ip_address(client_ip)
                return client_ip
            except ValueError:
                pass

        # Also check X-Real-IP header
        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            try:
                ip_address(real_ip)
                return real_ip
            except ValueError:
                pass

    # Fall back to direct client address
    return direct_ip


def _get_storage_uri() -> str:
    """Get rate limiter storage URI.

    Uses database index 1 of the configured Redis so counters are shared
    between workers without colliding with bot wizard state.

    Returns:
        Redis URI for the limiter storage.
    """
    redis_url = str(get_settings().redis_url).rstrip("/")
    scheme, _, rest = redis_url.partition("://")
    if "/" in rest:
        # Already has database specified
        return redis_url
    return f"{scheme}://{rest}/1"


_settings = get_settings()

# Create limiter instance with Redis backend for distributed deployments
limiter = Limiter(
    key_func=get_real_client_ip,
    default_limits=[f"{_settings.rate_limit_default}/minute"],
    storage_uri=_get_storage_uri(),
    enabled=_settings.rate_limit_enabled,
)

# Rate limit constants for different endpoint types
API_DEFAULT_LIMIT = f"{_settings.rate_limit_default}/minute"
AUTH_LOGIN_LIMIT = f"{_settings.rate_limit_auth_login}/minute"
