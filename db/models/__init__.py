"""
Model package exports.

Importing this package registers every model on ``Base.metadata``.
"""

from db.models.sales_record import SalesRecord

__all__ = ["SalesRecord"]
