"""Run the SLA analysis over a helpdesk CSV export.

Usage:
    python -m helpdesk_sla.tools.run_analysis
    python -m helpdesk_sla.tools.run_analysis --export data/tickets.csv --policy sla_policy.yaml
    python -m helpdesk_sla.tools.run_analysis --now 2025-08-25T09:00 --json
    python -m helpdesk_sla.tools.run_analysis --review --seed 7  # also pick a ticket for review
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from datetime import datetime, timezone
from pathlib import Path

from helpdesk_sla.adapters.csv_loader.loader import load_tickets
from helpdesk_sla.adapters.policy_file.yaml_loader import load_policy
from helpdesk_sla.application.use_cases.analyze_tickets import (
    AnalyzeTicketUseCase,
    BatchAnalysisUseCase,
    BatchResult,
)
from helpdesk_sla.application.use_cases.select_review import SelectTicketForReviewUseCase
from helpdesk_sla.config import settings
from helpdesk_sla.domain.entities.review_ledger import ReviewLedger
from helpdesk_sla.domain.errors import ConfigurationError
from helpdesk_sla.domain.value_objects.enums import RiskTier

logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


def _iso_datetime(raw: str) -> datetime:
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"--now must be ISO-8601, got {raw!r}")


def _print_summary(result: BatchResult) -> None:
    summary = result.summary()
    print(f"Evaluated at: {result.evaluated_at.isoformat()}")
    print(f"Tickets: {summary['analyzed']} analyzed, {summary['failed']} failed, {summary['open']} open")
    print(
        f"Violations (open tickets): assignment={summary['assignment_violations']}, "
        f"first_response={summary['first_response_violations']}, "
        f"follow_up={summary['follow_up_violations']}"
    )
    print("Risk tiers: " + ", ".join(f"{tier}={count}" for tier, count in summary["risk_tiers"].items()))

    flagged = [a for a in result.analyses if a.is_open and a.risk.tier.rank >= RiskTier.HIGH.rank]
    for analysis in sorted(flagged, key=lambda a: (-a.risk.tier.rank, a.ticket.id)):
        print(
            f"  #{analysis.ticket.id} [{analysis.risk.tier.value}] {analysis.risk.action.value}: "
            f"{analysis.risk.reason}"
        )
    for failure in result.failures:
        print(f"  row {failure.row_index}: {failure.error}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Business-hours SLA analysis of a helpdesk export")
    parser.add_argument(
        "--export", type=str, default=settings.ticket_export_path,
        help=f"CSV ticket export (default: {settings.ticket_export_path})",
    )
    parser.add_argument(
        "--policy", type=str, default=settings.sla_policy_path,
        help=f"SLA policy YAML file (default: {settings.sla_policy_path})",
    )
    parser.add_argument("--now", type=_iso_datetime, default=None, help="Evaluation instant, ISO-8601 (default: now)")
    parser.add_argument("--json", action="store_true", help="Print the full analysis as JSON")
    parser.add_argument(
        "--workers", type=int, default=settings.analysis_workers,
        help="Worker threads for the batch",
    )
    parser.add_argument("--review", action="store_true", help="Also select one ticket for quality review")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for review selection")
    args = parser.parse_args(argv)

    now = args.now or datetime.now(timezone.utc)

    export = Path(args.export)
    if not export.exists():
        logger.error("Ticket export not found: %s", export)
        return 1

    try:
        policy = load_policy(args.policy)
    except ConfigurationError as e:
        logger.error("SLA policy unusable: %s", e.message)
        return 2

    analyzer = AnalyzeTicketUseCase(policy)
    rows = load_tickets(export)
    result = BatchAnalysisUseCase(analyzer, workers=args.workers).execute(rows, now)

    selection = None
    if args.review:
        ledger = ReviewLedger(max_per_day=settings.reviews_per_day)
        selector = SelectTicketForReviewUseCase(ledger, analyzer.calendar, random.Random(args.seed))
        selection = selector.execute([a.ticket for a in result.analyses], result.evaluated_at)

    if args.json:
        payload = result.to_dict()
        if args.review:
            payload["review"] = selection.to_dict() if selection else None
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        _print_summary(result)
        if args.review and selection is None:
            print("No ticket selected for review")
        elif selection is not None:
            print(f"Selected for review: #{selection.ticket.id} (of {selection.eligible_count} eligible)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
