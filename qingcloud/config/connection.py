"""HTTP client construction for resolved configurations."""

import httpx


def connect_timeout(connection_timeout: int) -> httpx.Timeout:
    """Build a timeout that only bounds connection establishment.

    Reads, writes and pool waits stay unbounded. A timeout of 0 means
    connections may take as long as the OS allows.
    """
    connect = float(connection_timeout) if connection_timeout > 0 else None
    return httpx.Timeout(None, connect=connect)


def build_connection(connection_timeout: int | None = None) -> httpx.Client:
    """Create the reusable HTTP client attached to a Config.

    Args:
        connection_timeout: Connect timeout in seconds, or None for a
            client without any timeout

    Returns:
        A new httpx.Client
    """
    if connection_timeout is None:
        return httpx.Client(timeout=httpx.Timeout(None))
    return httpx.Client(timeout=connect_timeout(connection_timeout))
