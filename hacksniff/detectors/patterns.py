"""
Commit Pattern Analyzer
───────────────────────
Turns a raw commit list into the quantitative signal bundle everything
downstream is built on.

Signals:
  verification  : share of commits carrying a valid GitHub signature
  rapid commits : adjacent commits (by time) less than 5 minutes apart
  file patterns : dependency churn, rapid change bursts, high verification
  time patterns : frequent rapid commits, late-night development

No I/O. An empty commit list gives an all-zero bundle with no findings.
"""

from typing import Iterable, List

from hacksniff.config import AnalysisConfig
from hacksniff.models import Commit, CommitSignals

FINDING_DEPENDENCY_CHURN = "Package.json modifications detected"
FINDING_RAPID_CHANGES = "Multiple rapid file changes"
FINDING_HIGH_VERIFICATION = "High GitHub verification rate pattern"
FINDING_FREQUENT_RAPID = "Frequent rapid commits detected"
FINDING_LATE_NIGHT = "Unusual late-night development patterns"


def percentage(part: int, whole: int) -> int:
    """Integer percentage rounded half-up; 0 for an empty whole."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def count_rapid_commits(commits: Iterable[Commit], window) -> int:
    times = sorted(c.timestamp for c in commits)
    rapid = 0
    for earlier, later in zip(times, times[1:]):
        if later - earlier < window:
            rapid += 1
    return rapid


def _is_night(commit: Commit, config: AnalysisConfig) -> bool:
    hour = commit.timestamp.astimezone(config.tz).hour
    return hour >= config.night_start_hour or hour <= config.night_end_hour


def analyze_commit_patterns(commits: List[Commit], config: AnalysisConfig = None) -> CommitSignals:
    config = config or AnalysisConfig()
    commits = list(commits)

    total = len(commits)
    verified = sum(1 for c in commits if c.verified)
    ratio = percentage(verified, total)
    rapid = count_rapid_commits(commits, config.rapid_window)

    # ─── File patterns ──────────────────────────────────────────────────
    file_patterns = []
    keywords = [k.lower() for k in config.dependency_keywords]
    dependency_commits = sum(
        1 for c in commits if any(k in c.message.lower() for k in keywords)
    )
    if dependency_commits > 0:
        file_patterns.append(FINDING_DEPENDENCY_CHURN)

    if rapid > config.rapid_file_threshold:
        file_patterns.append(FINDING_RAPID_CHANGES)

    if ratio > config.high_verification_ratio:
        file_patterns.append(FINDING_HIGH_VERIFICATION)

    # ─── Time patterns ──────────────────────────────────────────────────
    time_patterns = []
    if rapid > config.rapid_time_threshold:
        time_patterns.append(FINDING_FREQUENT_RAPID)

    night_commits = sum(1 for c in commits if _is_night(c, config))
    if night_commits > total * config.night_fraction:
        time_patterns.append(FINDING_LATE_NIGHT)

    return CommitSignals(
        total_commits=total,
        verified_commits=verified,
        verification_ratio=ratio,
        rapid_commit_count=rapid,
        file_patterns=tuple(file_patterns),
        time_patterns=tuple(time_patterns),
    )
