"""Application configuration via Pydantic Settings.

NOTE: env names are mapped explicitly (SLA_POLICY_PATH, TICKET_EXPORT_PATH, ...)
to avoid silent misconfiguration. Only the API and CLI read these; the domain
receives plain objects.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Inputs
    sla_policy_path: str = Field(default="sla_policy.yaml", validation_alias="SLA_POLICY_PATH")
    ticket_export_path: str = Field(default="data/tickets.csv", validation_alias="TICKET_EXPORT_PATH")

    # Processing
    analysis_workers: int = Field(default=1, ge=1, validation_alias="ANALYSIS_WORKERS")
    reviews_per_day: int = Field(default=1, ge=0, validation_alias="REVIEWS_PER_DAY")

    # App
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
