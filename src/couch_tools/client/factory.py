"""Transport factory for creating configured transports.

This module provides a factory function that creates the production
transport from configuration, keeping transport setup out of the API layer.
"""

import logging

from .config import CouchConfig
from .transport import CouchTransport

logger = logging.getLogger("couch-tools")


def create_transport(config: CouchConfig | None = None) -> CouchTransport:
    """Create a transport based on configuration.

    Args:
        config: Client configuration. If None, loads from environment.

    Returns:
        Configured transport implementing the CouchTransport protocol.

    Raises:
        ValueError: If the authentication settings are incomplete or conflicting.

    Example:
        transport = create_transport(CouchConfig(url="http://couch.local:5984"))
    """
    config = config or CouchConfig()
    config.validate_config()

    from .http import HTTPTransport

    auth = "oauth" if config.oauth_enabled else "basic" if config.basic_auth_enabled else "none"
    logger.info(f"Using HTTP transport for {config.url} (auth: {auth})")
    return HTTPTransport(config)
