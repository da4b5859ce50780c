"""
Task Feasibility Engine - Configuration Management
Supports .env files and runtime configuration for cadence policy and logging.
"""

from typing import Dict, Any, Optional
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


# ============================================
# CADENCE POLICY CONFIGURATION
# ============================================

class PolicyConfig(BaseSettings):
    """
    Heuristics used when projecting work days for a cadence.
    These are approximations, not calendar enumeration.
    """
    three_times_weekly_quota: int = Field(
        default=3,
        ge=1,
        le=7,
        description="Working days per 7-day week for the three-times-weekly cadence"
    )
    flexible_work_ratio: float = Field(
        default=0.7,
        gt=0.0,
        le=1.0,
        description="Fraction of days assumed usable for the flexible cadence"
    )
    weekly_min_days: int = Field(
        default=14,
        ge=0,
        le=365,
        description="Weekly cadence is unavailable when the deadline is closer than this"
    )
    three_times_weekly_min_days: int = Field(
        default=7,
        ge=0,
        le=365,
        description="Three-times-weekly cadence is unavailable when the deadline is closer than this"
    )

    model_config = {
        "env_prefix": "FEASIBILITY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }


# ============================================
# LOGGING CONFIGURATION
# ============================================

class LoggingConfig(BaseSettings):
    """Logger level and optional rotating file output."""

    level: str = Field(
        default="INFO",
        description="Log level name (DEBUG, INFO, WARNING, ERROR)"
    )
    log_dir: Optional[str] = Field(
        default=None,
        description="Directory for rotating log files; console only when unset"
    )
    max_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        description="Maximum size of a log file before rotation"
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        le=50,
        description="Number of rotated log files to keep"
    )

    model_config = {
        "env_prefix": "LOG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }


# ============================================
# CACHED CONFIGURATION INSTANCES
# ============================================

@lru_cache()
def get_policy_config() -> PolicyConfig:
    """Get cached cadence policy instance."""
    return PolicyConfig()


@lru_cache()
def get_logging_config() -> LoggingConfig:
    """Get cached logging configuration instance."""
    return LoggingConfig()


def reload_config():
    """Clear configuration cache and reload from environment."""
    get_policy_config.cache_clear()
    get_logging_config.cache_clear()


# ============================================
# CONFIGURATION SUMMARY
# ============================================

def get_config_summary() -> Dict[str, Any]:
    """
    Get a summary of all configuration values.
    Useful for debugging and settings display.
    """
    policy = get_policy_config()
    logging_config = get_logging_config()

    return {
        "policy": {
            "three_times_weekly_quota": policy.three_times_weekly_quota,
            "flexible_work_ratio": policy.flexible_work_ratio,
            "weekly_min_days": policy.weekly_min_days,
            "three_times_weekly_min_days": policy.three_times_weekly_min_days,
        },
        "logging": {
            "level": logging_config.level,
            "file_output": bool(logging_config.log_dir),
        },
    }
