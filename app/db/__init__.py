"""
Database access for the marketplace order service.

- ConnDB: connection and session management
- SqlAlchemyUnitOfWork: one transaction over the order repositories
- SqlProductLookup / SqlSellerLookup: read-only catalog access
"""

from app.db.catalog import SqlProductLookup, SqlSellerLookup
from app.db.connection import ConnDB, get_db_connection
from app.db.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "ConnDB",
    "get_db_connection",
    "SqlAlchemyUnitOfWork",
    "SqlProductLookup",
    "SqlSellerLookup",
]
