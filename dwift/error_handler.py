"""Error handling helpers for the Dwolla client facade."""
from typing import Any, Dict
import logging

from dwift.integrations.contracts.interfaces import Response

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "Unexpected error"


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Response[Any]:
        logger.error("Unhandled exception in Dwolla client: %s (context=%s)", exc, context or {}, exc_info=True)
        return Response(success=False, message=UNEXPECTED_ERROR)
