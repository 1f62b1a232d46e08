"""Gateway factory - returns the configured gateway or falls back to offline"""

import logging

from payment_intent_gateway.config import Settings, settings as default_settings
from payment_intent_gateway.infrastructure.gateway.base import InferenceGateway
from payment_intent_gateway.infrastructure.gateway.offline import OfflineGateway
from payment_intent_gateway.infrastructure.gateway.openai import OpenAIGateway

logger = logging.getLogger(__name__)


def build_gateway(settings: Settings | None = None) -> InferenceGateway:
    """
    Return a gateway instance for the configured provider.

    Unknown providers, and ``openai`` without an API key, fall back to
    ``OfflineGateway``.
    """
    settings = settings or default_settings
    name = settings.inference_provider.lower().strip()

    if name == "offline":
        return OfflineGateway()

    if name == "openai":
        if not settings.inference_api_key:
            logger.warning("INFERENCE_API_KEY not set - falling back to offline gateway")
            return OfflineGateway()
        return OpenAIGateway(
            api_key=settings.inference_api_key,
            base_url=settings.inference_api_base,
            model=settings.inference_model,
        )

    logger.warning("Unknown inference provider %r - falling back to offline gateway", name)
    return OfflineGateway()
