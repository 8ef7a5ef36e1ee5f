"""Credit ledger and balance use cases"""
from .assign_credits import AssignCredits
from .assign_admin_credits import AssignAdminCredits
from .get_balance import GetBalance
from .list_ledger_entries import ListLedgerEntries
from .get_credit_history import GetCreditHistory
from .reconcile_balances import ReconcileBalances
from .dtos import (
    AssignCreditsCommandDTO,
    AssignAdminCreditsCommandDTO,
    CreditAssignmentResponseDTO,
    BalanceResponseDTO,
    LedgerEntryDTO,
    ListLedgerEntriesResponseDTO,
    CreditHistoryItemDTO,
    CreditHistoryResponseDTO,
    BalanceDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "AssignCredits",
    "AssignAdminCredits",
    "GetBalance",
    "ListLedgerEntries",
    "GetCreditHistory",
    "ReconcileBalances",
    "AssignCreditsCommandDTO",
    "AssignAdminCreditsCommandDTO",
    "CreditAssignmentResponseDTO",
    "BalanceResponseDTO",
    "LedgerEntryDTO",
    "ListLedgerEntriesResponseDTO",
    "CreditHistoryItemDTO",
    "CreditHistoryResponseDTO",
    "BalanceDiscrepancyDTO",
    "ReconciliationResultDTO",
]
