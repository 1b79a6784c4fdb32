"""CORS middleware that answers every preflight with 200."""

from fastapi import Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers

from contact_api.logging.config import get_logger

logger = get_logger(__name__)


class PreflightCORSMiddleware(CORSMiddleware):
    """
    Starlette CORSMiddleware with preflight rejections turned into empty 200s.

    Preflights from an allowed origin keep the usual Access-Control-* headers.
    Any other preflight gets a bare 200 without them, so the browser still
    blocks the follow-up request but clients never see Starlette's
    plain-text 400.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        """
        Build the preflight response.

        Args:
            request_headers: Headers of the OPTIONS request

        Returns:
            200 response, with CORS headers only when the preflight passed
        """
        response = super().preflight_response(request_headers=request_headers)
        if response.status_code == 200:
            return response

        logger.info(
            "CORS preflight not allowed",
            extra={
                "context": {
                    "origin": request_headers.get("origin"),
                    "requested_method": request_headers.get(
                        "access-control-request-method"
                    ),
                }
            },
        )
        return Response(status_code=200)
