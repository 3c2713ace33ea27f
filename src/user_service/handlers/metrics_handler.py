"""HTTP handler for the Prometheus scrape endpoint."""

import logging

from fastapi import Response, status
from fastapi.responses import PlainTextResponse

from user_service.observability import RequestMetrics

logger = logging.getLogger(__name__)


class MetricsHandler:
    """Serves the application's metrics registry."""

    def __init__(self, metrics: RequestMetrics) -> None:
        self._metrics = metrics

    async def metrics(self) -> Response:
        """Handle GET /metrics requests.

        Returns the exposition text, or 500 with the raw error text if the
        registry cannot be rendered.
        """
        try:
            payload = self._metrics.render()
        except Exception as e:
            logger.exception("Rendering metrics failed")
            return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(content=payload, media_type=self._metrics.content_type)
