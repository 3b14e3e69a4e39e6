"""
Cruises module.

Only the joined-cruise bookkeeping that account deletion must cascade
through lives here.

Public API:
- IJoinedCruiseRepository: Interface for joined-cruise records
"""

from .interfaces import IJoinedCruiseRepository

__all__ = [
    "IJoinedCruiseRepository",
]
