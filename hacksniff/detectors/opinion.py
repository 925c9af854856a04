"""
AI Opinion Normalizer
─────────────────────
The model is asked for a JSON object but may wrap it in prose or code
fences, drop fields, send the wrong types, or not answer at all. This module
turns whatever came back into an AIOpinion that always satisfies:

  - summary is a string
  - likelihood is an int in [0, 100]
  - keyFindings / recommendations are non-empty lists of strings
  - confidence is one of low / medium / high

Structural defects (unparseable JSON, missing fields, empty lists) and failed
calls fall through to `fallback_opinion`, a pure function of the signal bundle.
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Optional

from hacksniff.config import AnalysisConfig
from hacksniff.detectors.llm import LLMResponse
from hacksniff.models import CONFIDENCE_LEVELS, AIOpinion, CommitSignals, RepositoryInfo, human_date

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("summary", "likelihood", "keyFindings", "recommendations", "confidence")

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)")


@dataclass(frozen=True)
class OpinionOutcome:
    opinion: AIOpinion
    source: str  # "ai" or "fallback"
    reason: str = ""

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def estimate_likelihood(signals: CommitSignals, config: AnalysisConfig = None) -> int:
    """Heuristic likelihood: weighted verification ratio plus rapid commits, capped at 100."""
    config = config or AnalysisConfig()
    raw = (
        signals.verification_ratio * config.fallback_ratio_weight
        + signals.rapid_commit_count * config.fallback_rapid_weight
    )
    return _clamp(math.floor(raw + 0.5))


def confidence_from_likelihood(likelihood: int, config: AnalysisConfig = None) -> str:
    config = config or AnalysisConfig()
    if likelihood > config.high_confidence_likelihood:
        return "high"
    if likelihood > config.medium_confidence_likelihood:
        return "medium"
    return "low"


def confidence_from_rapid_commits(rapid: int, config: AnalysisConfig = None) -> str:
    config = config or AnalysisConfig()
    if rapid > config.fallback_high_rapid:
        return "high"
    if rapid > config.fallback_medium_rapid:
        return "medium"
    return "low"


def extract_json_text(raw: str) -> str:
    """Strip code fences and surrounding commentary around the JSON payload."""
    text = _FENCE.sub("", raw.strip()).strip()
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        text = text[start:end + 1]
    return text


def _round_clamp(value: float) -> Optional[int]:
    if not math.isfinite(value):
        return None
    return _clamp(math.floor(max(-1.0, min(101.0, value)) + 0.5))


def _coerce_likelihood(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return _clamp(value)
    if isinstance(value, float):
        return _round_clamp(value)
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = match.group(1)
        if "." in number:
            return _round_clamp(float(number))
        try:
            return _clamp(int(number))
        except ValueError:
            # Beyond the interpreter's int digit limit
            return 0 if number.startswith("-") else 100
    return None


def _coerce_list(value) -> tuple:
    if not isinstance(value, list):
        value = [value]
    return tuple(str(item) for item in value)


def parse_opinion(raw: str, signals: CommitSignals, config: AnalysisConfig = None) -> Optional[AIOpinion]:
    """Parse the model's reply. Returns None when it needs the fallback."""
    config = config or AnalysisConfig()
    if not raw or not raw.strip():
        return None

    try:
        data = json.loads(extract_json_text(raw))
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    if any(name not in data for name in REQUIRED_FIELDS):
        return None

    key_findings = _coerce_list(data["keyFindings"])
    recommendations = _coerce_list(data["recommendations"])
    if not key_findings or not recommendations:
        return None

    likelihood = _coerce_likelihood(data["likelihood"])
    if likelihood is None:
        likelihood = estimate_likelihood(signals, config)

    confidence = str(data["confidence"]).strip().lower()
    if confidence not in CONFIDENCE_LEVELS:
        confidence = confidence_from_likelihood(likelihood, config)

    return AIOpinion(
        summary=str(data["summary"]),
        likelihood=likelihood,
        key_findings=key_findings,
        recommendations=recommendations,
        confidence=confidence,
    )


def fallback_opinion(
    signals: CommitSignals,
    repo: RepositoryInfo,
    config: AnalysisConfig = None,
) -> AIOpinion:
    """Deterministic opinion built only from the signal bundle. Cannot fail."""
    config = config or AnalysisConfig()
    rapid = signals.rapid_commit_count
    automated = rapid > config.fallback_high_rapid

    summary = (
        f"Analysis based on {signals.total_commits} commits with "
        f"{signals.verification_ratio}% GitHub verification rate. "
        f"Rapid commits: {rapid}. "
        f"Development patterns suggest {'automated' if automated else 'manual'} code generation."
    )
    key_findings = (
        f"GitHub verification rate: {signals.verification_ratio}% "
        f"({signals.verified_commits}/{signals.total_commits} commits)",
        f"Rapid commit sequences: {rapid} detected",
        "High automation suggests AI-assisted development"
        if automated
        else "Development patterns suggest human involvement",
        f"Repository created: {human_date(repo.created_at)}",
    )
    recommendations = (
        "Manual code review recommended for hackathon compliance"
        if automated
        else "Development patterns appear normal",
        "Consider reviewing commit history for development timeline",
        "Validate that primary development occurred within hackathon timeframe",
    )

    return AIOpinion(
        summary=summary,
        likelihood=estimate_likelihood(signals, config),
        key_findings=key_findings,
        recommendations=recommendations,
        confidence=confidence_from_rapid_commits(rapid, config),
    )


def normalize_opinion(
    response: LLMResponse,
    signals: CommitSignals,
    repo: RepositoryInfo,
    config: AnalysisConfig = None,
) -> OpinionOutcome:
    config = config or AnalysisConfig()

    if not response.ok:
        reason = response.error or "empty response"
        logger.info("Using fallback opinion: %s", reason)
        return OpinionOutcome(fallback_opinion(signals, repo, config), "fallback", reason)

    opinion = parse_opinion(response.text, signals, config)
    if opinion is None:
        logger.warning("Could not parse Claude response, using fallback opinion")
        logger.debug("Raw response: %s", response.text[:500])
        return OpinionOutcome(
            fallback_opinion(signals, repo, config), "fallback", "malformed response"
        )

    logger.debug("Claude opinion accepted (likelihood=%d)", opinion.likelihood)
    return OpinionOutcome(opinion, "ai")
