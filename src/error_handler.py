"""Error handling helpers for storefront backend calls."""
from typing import Any, Dict
import logging

from src.integrations.errors import StorefrontError, ValidationRejection

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        context = context or {}
        if isinstance(exc, ValidationRejection):
            logger.info("Rejected before sending: %s", exc.message)
            message = exc.message
        elif isinstance(exc, StorefrontError):
            logger.error("Fetch Error for %s: %s", context.get("path", "<unknown>"), exc)
            message = exc.message
        else:
            logger.error("Unhandled exception in storefront client: %s", exc, exc_info=True)
            message = "An internal error occurred while processing your request. Please try again later."
        return {
            "message": message,
            "kind": getattr(exc, "kind", "error"),
            "fallback": True,
            "metadata": {"error": str(exc), "context": context},
        }
