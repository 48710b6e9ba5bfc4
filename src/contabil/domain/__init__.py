"""Domain layer for contabil: chart of accounts, journal, balances, statements."""

__all__ = [
    "AccountService",
    "JournalService",
    "BalanceService",
    "StatementService",
    "InvoicePostingService",
]

_SERVICE_MODULES = {
    "AccountService": "contabil.domain.account",
    "JournalService": "contabil.domain.journal",
    "BalanceService": "contabil.domain.balance",
    "StatementService": "contabil.domain.statements",
    "InvoicePostingService": "contabil.domain.invoices",
}


# Import services lazily so entities and errors stay importable from the
# database layer without a cycle through this package
def __getattr__(name):
    if name in _SERVICE_MODULES:
        import importlib

        return getattr(importlib.import_module(_SERVICE_MODULES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
