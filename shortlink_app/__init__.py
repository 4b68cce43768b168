"""
Shortlink: short-code URL store with click analytics.

Both stores (URLs and click events) run on interchangeable backends:
an in-process store for development and a Redis store shared by every
service instance.
"""

__version__ = "1.0.0"
