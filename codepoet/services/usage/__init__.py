"""Usage accounting module"""

from codepoet.services.usage.account_locks import AccountLocks
from codepoet.services.usage.usage_ledger import UsageLedger

__all__ = ["AccountLocks", "UsageLedger"]
