"""Route layer — route identity and crawl records.

Routes are logical paths in the application's address space.  Every route the
crawl touches gets a ``RouteRecord`` that survives into the build report.
"""

from pawprint.routes.path import RouteRecord, normalize_route, route_segments

__all__ = ["RouteRecord", "normalize_route", "route_segments"]
