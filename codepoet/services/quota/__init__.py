"""Quota policy module"""

from codepoet.services.quota.quota_policy import Allow, Deny, QuotaDecision, QuotaPolicy

__all__ = ["Allow", "Deny", "QuotaDecision", "QuotaPolicy"]
