"""Application configuration."""
import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ValidatorConfig:
    """Mapping validator settings."""

    strict_mode: bool = True  # fail on mappings without type references
    collect_all: bool = False  # report every violation instead of the first

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """Load config from environment variables."""
        return cls(
            strict_mode=_env_flag("SHAPEMAP_STRICT_MODE", True),
            collect_all=_env_flag("SHAPEMAP_COLLECT_ALL", False),
        )


@dataclass
class AppConfig:
    """Application settings."""

    report_dir: str = "./reports"
    log_level: str = "WARNING"
    validator: ValidatorConfig = None

    def __post_init__(self):
        """Initialize default values."""
        if self.validator is None:
            self.validator = ValidatorConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            report_dir=os.getenv("SHAPEMAP_REPORT_DIR", "./reports"),
            log_level=os.getenv("SHAPEMAP_LOG_LEVEL", "WARNING").upper(),
            validator=ValidatorConfig.from_env(),
        )


# Global instance
app_config = AppConfig.from_env()
