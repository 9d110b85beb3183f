"""
Backend for the Chidi Ogara portfolio site.

- ``portfolio.app``: FastAPI app serving site settings and payment transactions
- ``portfolio.clients``: async settings client with a keyed query cache
"""

__version__ = "1.0.0"
