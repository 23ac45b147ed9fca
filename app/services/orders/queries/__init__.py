"""Read-side services: order queries, reporting and the commission ledger."""

from .commission_ledger_service import CommissionLedgerService
from .order_query_service import OrderQueryService

__all__ = ["OrderQueryService", "CommissionLedgerService"]
