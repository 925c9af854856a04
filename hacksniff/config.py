"""
Configuration
─────────────
Two layers:

  AnalysisConfig  : every threshold, weight and window the detectors use.
                    Immutable; passed explicitly into each detector.
  Settings        : credentials and runtime knobs read from the environment
                    (a local .env file is honoured via python-dotenv).
"""

import os
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from dotenv import load_dotenv

from hacksniff.errors import ConfigurationError

DEFAULT_CUTOFF = datetime(2025, 5, 31, tzinfo=timezone.utc)
DEFAULT_MODEL = "claude-3-5-sonnet-20241022"

_ENTRY_FILES = (
    "src/App.tsx",
    "src/App.js",
    "src/app.tsx",
    "src/app.js",
    "App.tsx",
    "App.js",
)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 instant. Naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class AnalysisConfig:
    # Commit pattern analysis
    rapid_window: timedelta = timedelta(minutes=5)
    rapid_file_threshold: int = 5
    rapid_time_threshold: int = 10
    high_verification_ratio: int = 70
    dependency_keywords: Tuple[str, ...] = ("package.json", "dependencies")
    night_start_hour: int = 22
    night_end_hour: int = 6
    night_fraction: float = 0.3
    tz: timezone = timezone.utc

    # Hackathon eligibility
    eligibility_cutoff: datetime = DEFAULT_CUTOFF

    # Fallback opinion
    fallback_ratio_weight: float = 0.3
    fallback_rapid_weight: float = 2.0
    fallback_high_rapid: int = 10
    fallback_medium_rapid: int = 5

    # Confidence derived from likelihood when the model sends garbage
    high_confidence_likelihood: int = 80
    medium_confidence_likelihood: int = 60

    # Verdict
    automation_threshold: int = 70

    # LLM prompt
    prompt_message_count: int = 15

    # Marker check
    marker: str = "bolt.new"
    marker_files: Tuple[str, ...] = field(default=_ENTRY_FILES)

    def with_cutoff(self, cutoff: datetime) -> "AnalysisConfig":
        return replace(self, eligibility_cutoff=cutoff)


@dataclass(frozen=True)
class Settings:
    github_token: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    commit_limit: int = 200
    eligibility_cutoff: Optional[datetime] = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        cutoff_raw = os.getenv("HACKSNIFF_ELIGIBILITY_CUTOFF")
        try:
            cutoff = parse_timestamp(cutoff_raw) if cutoff_raw else None
        except ValueError:
            raise ConfigurationError(
                f"HACKSNIFF_ELIGIBILITY_CUTOFF is not an ISO-8601 timestamp: {cutoff_raw!r}"
            )

        limit_raw = os.getenv("HACKSNIFF_COMMIT_LIMIT", "200")
        try:
            commit_limit = int(limit_raw)
        except ValueError:
            raise ConfigurationError(f"HACKSNIFF_COMMIT_LIMIT must be an integer, got {limit_raw!r}")
        if commit_limit < 1:
            raise ConfigurationError("HACKSNIFF_COMMIT_LIMIT must be positive")

        return cls(
            github_token=os.getenv("GITHUB_TOKEN") or None,
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            model=os.getenv("HACKSNIFF_MODEL", DEFAULT_MODEL),
            commit_limit=commit_limit,
            eligibility_cutoff=cutoff,
        )

    def require(self, offline: bool = False) -> None:
        """Raise ConfigurationError if a credential the run needs is missing."""
        missing = []
        if not self.github_token:
            missing.append("GITHUB_TOKEN")
        if not offline and not self.anthropic_api_key:
            missing.append("ANTHROPIC_API_KEY")
        if missing:
            raise ConfigurationError(
                f"{' and '.join(missing)} environment variable"
                f"{'s are' if len(missing) > 1 else ' is'} required"
            )

    def analysis_config(self) -> AnalysisConfig:
        config = AnalysisConfig()
        if self.eligibility_cutoff is not None:
            config = config.with_cutoff(self.eligibility_cutoff)
        return config
