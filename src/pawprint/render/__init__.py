"""Render layer — talk to the render collaborator and read what it produced.

The collaborator itself (templates, data fetching) lives outside pawprint.
This layer invokes it, classifies the outcome, and pulls route links out of
the rendered documents so the crawl can keep going.
"""

from pawprint.render.links import LinkExtractor, is_html_route
from pawprint.render.loader import load_renderer
from pawprint.render.resolver import RenderResponse, RenderResult, RouteResolver

__all__ = [
    "LinkExtractor",
    "RenderResponse",
    "RenderResult",
    "RouteResolver",
    "is_html_route",
    "load_renderer",
]
