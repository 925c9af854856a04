"""
Value objects passed between the detectors.

All of them are frozen; `to_dict()` gives the camelCase JSON shape that the
`--json` output emits.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from hacksniff.config import parse_timestamp

CONFIDENCE_LEVELS = ("low", "medium", "high")


def human_date(value: datetime) -> str:
    """Render a date as 'Sat May 31 2025'."""
    return value.strftime("%a %b %d %Y")


@dataclass(frozen=True)
class Commit:
    sha: str
    timestamp: datetime
    message: str
    verified: bool = False
    author: Optional[str] = None

    @classmethod
    def from_github(cls, payload: dict) -> "Commit":
        """Build from one element of GET /repos/{owner}/{repo}/commits."""
        inner = payload["commit"]
        verification = inner.get("verification") or {}
        author = payload.get("author") or {}
        return cls(
            sha=payload["sha"],
            timestamp=parse_timestamp(inner["author"]["date"]),
            message=inner.get("message") or "",
            verified=bool(verification.get("verified", False)),
            author=author.get("login"),
        )


@dataclass(frozen=True)
class RepositoryInfo:
    full_name: str
    created_at: datetime
    size: int = 0
    language: Optional[str] = None
    default_branch: str = "main"

    @classmethod
    def from_github(cls, payload: dict) -> "RepositoryInfo":
        return cls(
            full_name=payload.get("full_name", ""),
            created_at=parse_timestamp(payload["created_at"]),
            size=payload.get("size") or 0,
            language=payload.get("language"),
            default_branch=payload.get("default_branch") or "main",
        )


@dataclass(frozen=True)
class CommitSignals:
    total_commits: int = 0
    verified_commits: int = 0
    verification_ratio: int = 0
    rapid_commit_count: int = 0
    file_patterns: Tuple[str, ...] = ()
    time_patterns: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "rapidCommits": self.rapid_commit_count,
            "filePatterns": list(self.file_patterns),
            "timePatterns": list(self.time_patterns),
            "verifiedCommits": self.verified_commits,
            "totalCommits": self.total_commits,
            "githubVerifiedPercentage": self.verification_ratio,
        }


@dataclass(frozen=True)
class Eligibility:
    is_eligible: bool
    reason: str


@dataclass(frozen=True)
class AIOpinion:
    summary: str
    likelihood: int
    key_findings: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    confidence: str

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "likelihood": self.likelihood,
            "keyFindings": list(self.key_findings),
            "recommendations": list(self.recommendations),
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class Verdict:
    repo_url: str
    likelihood: int
    is_likely_automated: bool
    is_eligible: bool
    has_marker: Optional[bool]
    signals: CommitSignals
    confidence: str
    details: Tuple[str, ...]
    opinion: AIOpinion
    eligibility_reason: str

    def to_dict(self) -> dict:
        payload = {
            "repoUrl": self.repo_url,
            "verificationPercentage": self.likelihood,
            "isLikelyAIGenerated": self.is_likely_automated,
            "isEligible": self.is_eligible,
            "commitPatterns": self.signals.to_dict(),
            "confidence": self.confidence,
            "details": list(self.details),
            "aiAnalysis": self.opinion.to_dict(),
            "eligibilityReason": self.eligibility_reason,
        }
        if self.has_marker is not None:
            payload["hasBoltNewBadge"] = self.has_marker
        return payload
