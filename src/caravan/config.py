"""Engine configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CaravanSettings(BaseSettings):
    """Settings for a caravan run.

    Loads from environment variables automatically:
        CARAVAN_TABLE_MAX_WIDTH, CARAVAN_LOG_LEVEL, CARAVAN_COLOR,
        CARAVAN_MAX_EXIT_STATUS

    Or pass values directly to run().
    """

    table_max_width: int = Field(default=300, gt=0, description="Maximum width of the final report table")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Level of the engine's own diagnostic logging"
    )
    color: bool = Field(default=True, description="Emit styled console output")
    max_exit_status: int = Field(
        default=255,
        ge=1,
        le=255,
        description="Upper bound of the exit status derived from the failure count",
    )

    model_config = SettingsConfigDict(
        env_prefix="CARAVAN_",
        extra="ignore",
    )
