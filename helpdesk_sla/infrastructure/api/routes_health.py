"""Health check endpoint."""

from fastapi import APIRouter

from helpdesk_sla.adapters.policy_file.yaml_loader import load_policy
from helpdesk_sla.config import settings
from helpdesk_sla.domain.errors import ConfigurationError

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """Check that the API is up and the SLA policy file is usable."""
    try:
        load_policy(settings.sla_policy_path)
        policy_status = "loaded"
    except ConfigurationError as e:
        policy_status = f"error: {e.message}"

    return {
        "status": "ok" if policy_status == "loaded" else "degraded",
        "policy": policy_status,
        "service": "Helpdesk SLA Engine",
    }
