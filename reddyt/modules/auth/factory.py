"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authentication stack based on configuration
- Wires dependencies together
- Returns only the gateway (hiding implementation)
"""

import logging
from typing import Optional

from ...config.provider import ConfigProvider
from .gateway import AuthenticationGateway
from .interfaces import Clock, SystemClock
from .secret import SecretManager
from .tokens import TokenCodec

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates the one SecretManager for the process
    - Wires it into the codec and gateway via dependency injection
    - Returns only the public interface
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        clock: Optional[Clock] = None,
        secret_manager: Optional[SecretManager] = None
    ) -> AuthenticationGateway:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider
            clock: Optional time source (defaults to the system clock)
            secret_manager: Optional pre-built secret manager

        Returns:
            AuthenticationGateway

        Raises:
            ConfigurationError: If the admin identity is missing or invalid
        """
        identity = config_provider.get_admin_identity()
        auth_config = config_provider.get_auth_config()

        if secret_manager is None:
            if auth_config.signing_secret:
                logger.info("Using configured signing secret, sessions survive restarts")
            else:
                logger.info("No signing secret configured, sessions end with this process")
            secret_manager = SecretManager(preset=auth_config.signing_secret)

        return AuthenticationGateway(
            identity=identity,
            token_codec=TokenCodec(secret_manager),
            clock=clock or SystemClock(),
            session_ttl=auth_config.session_ttl,
        )
