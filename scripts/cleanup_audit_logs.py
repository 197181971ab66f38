#!/usr/bin/env python3
"""
Audit Log Retention Script

Deletes audit logs older than the retention window for one partner scope.
Meant to run from a scheduler (cron / Cloud Scheduler), never from a request.

Usage:
    python scripts/cleanup_audit_logs.py --dry-run
    python scripts/cleanup_audit_logs.py --partner-id acme --retention-days 30
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from spontaneity.config import settings
from spontaneity.db.client import get_service_role_client
from spontaneity.services.audit_log_service import cleanup_old_audit_logs

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete expired audit logs")
    parser.add_argument(
        "--partner-id",
        default=None,
        help="Partner scope to clean (default scope when omitted)",
    )
    parser.add_argument(
        "--retention-days",
        type=int,
        default=settings.AUDIT_LOG_RETENTION_DAYS,
        help=f"Keep logs newer than this many days (default {settings.AUDIT_LOG_RETENTION_DAYS})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only count expired logs",
    )
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)

    count = await cleanup_old_audit_logs(
        get_service_role_client(),
        partner_id=args.partner_id,
        retention_days=args.retention_days,
        dry_run=args.dry_run,
    )

    action = "would delete" if args.dry_run else "deleted"
    print(f"✅ {action} {count} audit logs (partner scope: {args.partner_id or 'default'})")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
