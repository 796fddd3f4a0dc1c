"""
Client library for the Wikia public REST API.

Provides:
- Wikia: API client, scoped to one wiki or cross-wiki
- WikiRequiredError: raised by wiki-only methods on a cross-wiki client
"""

from wikia.client import Wikia, WikiRequiredError, __version__

__all__ = [
    "Wikia",
    "WikiRequiredError",
    "__version__",
]
