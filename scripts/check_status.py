#!/usr/bin/env python3
"""
Status Check Script

Inspect usage accounts and saved poems directly in the local store.
Useful for debugging without needing API authentication.

Usage:
    # List all accounts with their counters
    ENV=staging uv run python scripts/check_status.py accounts

    # Show one account (after applying today's rollover)
    ENV=staging uv run python scripts/check_status.py accounts --id <uid>

    # List an account's poems (most recent N)
    ENV=staging uv run python scripts/check_status.py poems --id <uid> --recent 5

    # Change an account's tier
    ENV=staging uv run python scripts/check_status.py set-tier --id <uid> --tier pro
"""

import argparse
import asyncio
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

env_file = os.getenv("ENV", "local")
load_dotenv(f".env.{env_file}")

from codepoet.db import AsyncSessionLocal, create_tables
from codepoet.exceptions import AccountNotFoundError
from codepoet.models.account import Account, Tier
from codepoet.services.account import AccountService
from codepoet.services.quota import QuotaPolicy
from codepoet.services.storage import PoemStore, SqlKeyValueStore
from codepoet.services.usage import UsageLedger


def format_datetime(dt: Optional[datetime]) -> str:
    if dt is None:
        return "-"
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def print_account(account: Account, policy: QuotaPolicy) -> None:
    remaining = policy.remaining(account.tier, account.today_count, account.lifetime_count)
    print(f"{account.id}")
    print(f"  tier:        {account.tier.value}")
    print(f"  today:       {account.today_count} (reset {account.last_reset_date})")
    print(f"  lifetime:    {account.lifetime_count}")
    print(f"  remaining:   {'unlimited' if remaining is None else remaining}")
    print(f"  updated:     {format_datetime(account.updated_at)}")


async def show_accounts(kv: SqlKeyValueStore, account_id: Optional[str]) -> None:
    policy = QuotaPolicy.from_settings()
    ledger = UsageLedger(kv)

    if account_id:
        summary = await AccountService(ledger, policy).usage_summary(account_id)
        print_account(await ledger.load(summary.account_id), policy)
        return

    keys = await kv.keys("account:")
    if not keys:
        print("No accounts found")
        return
    for key in keys:
        print_account(await ledger.load(key.split(":", 1)[1]), policy)


async def show_poems(kv: SqlKeyValueStore, account_id: str, recent: Optional[int]) -> None:
    records = await PoemStore(kv).list_poems(account_id, limit=recent)
    if not records:
        print(f"No poems for {account_id}")
        return

    for record in records:
        star = "*" if record.favorite else " "
        first_line = record.output.splitlines()[0] if record.output else ""
        print(f"{star} {record.id}  {format_datetime(record.created_at)}  "
              f"[{record.style}/{record.language}]  {first_line[:60]}")


async def set_tier(kv: SqlKeyValueStore, account_id: str, tier: str) -> None:
    policy = QuotaPolicy.from_settings()
    ledger = UsageLedger(kv)
    account = await AccountService(ledger, policy).set_tier(account_id, Tier(tier))
    print_account(account, policy)


async def run(args: argparse.Namespace) -> None:
    await create_tables()
    kv = SqlKeyValueStore(AsyncSessionLocal)

    try:
        if args.command == "accounts":
            await show_accounts(kv, args.id)
        elif args.command == "poems":
            await show_poems(kv, args.id, args.recent)
        elif args.command == "set-tier":
            await set_tier(kv, args.id, args.tier)
    except AccountNotFoundError as e:
        print(e.message)
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description="Inspect CodePoet accounts and poems")
    subparsers = parser.add_subparsers(dest="command", required=True)

    accounts_parser = subparsers.add_parser("accounts", help="List usage accounts")
    accounts_parser.add_argument("--id", help="Only this account")

    poems_parser = subparsers.add_parser("poems", help="List an account's poems")
    poems_parser.add_argument("--id", required=True, help="Account id (Firebase uid)")
    poems_parser.add_argument("--recent", type=int, help="Only the N most recent")

    tier_parser = subparsers.add_parser("set-tier", help="Change an account's tier")
    tier_parser.add_argument("--id", required=True, help="Account id (Firebase uid)")
    tier_parser.add_argument("--tier", required=True, choices=[t.value for t in Tier])

    asyncio.run(run(parser.parse_args()))


if __name__ == "__main__":
    main()
