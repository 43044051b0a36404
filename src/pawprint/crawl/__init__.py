"""Crawl layer — route discovery with bounded, deterministic concurrency.

Public API::

    from pawprint.crawl import CrawlScheduler

    scheduler = CrawlScheduler(resolver, extractor, mapper, registry, writer, manifest)
    manifest = await scheduler.run(["/"], concurrency_limit=4)
"""

from pawprint.crawl.scheduler import CrawlScheduler

__all__ = ["CrawlScheduler"]
