from hacksniff.detectors.eligibility import check_eligibility
from hacksniff.detectors.llm import LLMAnalyzer, LLMResponse
from hacksniff.detectors.opinion import OpinionOutcome, fallback_opinion, normalize_opinion, parse_opinion
from hacksniff.detectors.patterns import analyze_commit_patterns
from hacksniff.detectors.scoring import VerdictComposer

__all__ = [
    "LLMAnalyzer",
    "LLMResponse",
    "OpinionOutcome",
    "VerdictComposer",
    "analyze_commit_patterns",
    "check_eligibility",
    "fallback_opinion",
    "normalize_opinion",
    "parse_opinion",
]
