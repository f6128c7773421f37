"""Runtime configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class StestSettings(BaseSettings):
    """Settings for reporters and the command-line runner.

    Loads from environment variables automatically:
        STEST_COLOR, STEST_REPORT_PASSES, STEST_LOG_LEVEL

    Or pass values directly when constructing.
    """

    color: bool = Field(default=True, description="Colorize console output")
    report_passes: bool = Field(
        default=True, description="Emit a diagnostic line for passing assertions, not only failures"
    )
    log_level: LogLevel = Field(default="WARNING", description="Level for the stest loggers")

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="STEST_",
    )
