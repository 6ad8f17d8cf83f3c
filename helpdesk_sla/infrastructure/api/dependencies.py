"""FastAPI dependency injection — wires the policy file and export into use cases."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, HTTPException

from helpdesk_sla.adapters.csv_loader.loader import CsvTicketSource
from helpdesk_sla.adapters.policy_file.yaml_loader import load_policy
from helpdesk_sla.application.ports.ticket_source import TicketSource
from helpdesk_sla.application.use_cases.analyze_tickets import (
    AnalyzeTicketUseCase,
    BatchAnalysisUseCase,
)
from helpdesk_sla.config import settings
from helpdesk_sla.domain.errors import ConfigurationError
from helpdesk_sla.domain.value_objects.sla_policy import SLAPolicy

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _load_policy_cached(path: str) -> SLAPolicy:
    return load_policy(path)


def get_policy() -> SLAPolicy:
    try:
        return _load_policy_cached(settings.sla_policy_path)
    except ConfigurationError as e:
        logger.error("SLA policy unusable: %s", e.message)
        raise HTTPException(status_code=500, detail=f"SLA policy error: {e.message}")


def get_ticket_source() -> TicketSource:
    return CsvTicketSource(settings.ticket_export_path)


def get_analyze_ticket_uc(policy: SLAPolicy = Depends(get_policy)) -> AnalyzeTicketUseCase:
    return AnalyzeTicketUseCase(policy)


def get_batch_analysis_uc(
    analyzer: AnalyzeTicketUseCase = Depends(get_analyze_ticket_uc),
) -> BatchAnalysisUseCase:
    return BatchAnalysisUseCase(analyzer, workers=settings.analysis_workers)
