"""gridcsp solver configuration."""

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv(usecwd=True) or None


class SolverConfig(BaseSettings):
    """Configuration settings for the gridcsp solver.

    Every field can be overridden with a `GRIDCSP_`-prefixed environment variable or an
    entry in a `.env` file.
    """

    seed: int | None = None
    """Default seed for randomized search and puzzle carving. If None (default), unseeded."""

    report_interval: int = Field(default=100_000, gt=0)
    """Interval (in number of search nodes) at which to report progress. Default: 100,000."""

    log_dir: str = "logs"
    """Directory for per-run log files written by the command-line runner. Default: "logs"."""

    model_config = SettingsConfigDict(
        env_prefix="GRIDCSP_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SolverConfig()
