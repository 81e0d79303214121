from codepoet.services.account.account_service import AccountService, UsageSummary

__all__ = ["AccountService", "UsageSummary"]
