"""A helper to create a synchronous HTTP client (via `httpx.Client`)
with common configurations.
"""

from httpx import Client, Limits, Timeout


def create_http_client(
    max_connections: int = 10,
    connect_timeout: float = 1.0,
    request_timeout: float = 5.0,
    pool_timeout: float = 1.0,
) -> Client:
    """Create a new `httpx.Client` with common configurations.

    Args:
      - `max_connections` {int}: Max connections of the connection pool.
      - `connect_timeout` {float}: The timeout for establishing a connection to the host.
      - `request_timeout` {float}: The timeout for handling a request to the host.
      - `pool_timeout` {float}: The timeout for acquiring a connection from the pool.
    Returns:
      - {Client}: An HTTP client.
    """
    return Client(
        limits=Limits(max_connections=max_connections),
        timeout=Timeout(request_timeout, connect=connect_timeout, pool=pool_timeout),
    )
