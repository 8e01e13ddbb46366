"""Configuration for the selection workflow runtime.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkflowSettings(BaseSettings):
    """Settings for the workflow runtime and its demo collaborators.

    Environment variables:
    - LOG_LEVEL                                 (optional)
    - SELECTION_WORKFLOW_ITEMS_PATH             (optional)
    - SELECTION_WORKFLOW_DELETE_DELAY_SECONDS   (optional)
    - SELECTION_WORKFLOW_DELETE_FAILS           (optional)

    Notes:
        Tests can point at a specific env file via
        `WorkflowSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    items_path: Path | None = Field(
        default=None,
        validation_alias="SELECTION_WORKFLOW_ITEMS_PATH",
        description="JSON file with the initial items (built-in seed items when unset)",
    )

    delete_delay_seconds: float = Field(
        default=3.0,
        ge=0.0,
        validation_alias="SELECTION_WORKFLOW_DELETE_DELAY_SECONDS",
        description="Latency of the simulated delete operation",
    )

    delete_fails: bool = Field(
        default=False,
        validation_alias="SELECTION_WORKFLOW_DELETE_FAILS",
        description="Make the simulated delete operation fail, to exercise the retry prompt",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )
