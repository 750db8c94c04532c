"""
Database glue for the money kernel.

Only column types live here; schema design is left to the application.
"""

from money_kernel.db.types import MoneyType

__all__ = ["MoneyType"]
