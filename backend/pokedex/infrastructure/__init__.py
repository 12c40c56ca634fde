"""Infrastructure Layer — dataset loading, upstream HTTP client, logging.

Invariants:
    - Infrastructure never imports from api/ or services/
    - External failures mapped to core/errors.py types at this boundary
"""
