"""
Top-level package for the storefront related-products service.

This package normalizes business product catalogs into a snapshot, ranks
related products for the product view, backs the storefront search and
the business dashboard counters, and serves all of it over a small HTTP
API. There are no side-effects on import; each module that does I/O can be
executed as a script for ad-hoc work.
"""
