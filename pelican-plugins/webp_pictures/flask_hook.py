"""Rewrite HTML responses of a Flask app on their way out."""
from __future__ import annotations

import logging

from flask import Flask, Response, request

from .rewriter import PictureRewriter

logger = logging.getLogger(__name__)


def install(app: Flask, rewriter: PictureRewriter) -> None:
    """Register an ``after_request`` handler that converts images in HTML pages."""

    @app.after_request
    def _rewrite_pictures(response: Response) -> Response:
        if response.status_code != 200 or response.mimetype != 'text/html':
            return response
        if response.direct_passthrough or response.is_streamed:
            return response

        html = response.get_data(as_text=True)
        rewritten, stats = rewriter.rewrite_with_stats(html)
        if rewritten != html:
            response.set_data(rewritten)
            logger.debug("Converted %d of %d images in %s", stats.converted, stats.images, request.path)
        return response

    app.extensions['webp_pictures'] = rewriter
