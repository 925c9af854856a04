"""
Request pipeline: URL in, verdict out.

  parse URL → repository → commits → eligibility → commit patterns
  → badge check → Claude → opinion normalizer → verdict

Input, GitHub fetch and configuration errors propagate as SniffError
subclasses. A failing or confused LLM never does.
"""

import logging
from typing import Optional

from hacksniff.config import AnalysisConfig, Settings
from hacksniff.detectors.eligibility import check_eligibility
from hacksniff.detectors.llm import LLMAnalyzer
from hacksniff.detectors.opinion import normalize_opinion
from hacksniff.detectors.patterns import analyze_commit_patterns
from hacksniff.detectors.scoring import VerdictComposer
from hacksniff.github_client import GitHubClient, parse_repo_url
from hacksniff.models import Verdict

logger = logging.getLogger(__name__)


class Analyzer:
    def __init__(
        self,
        github: GitHubClient,
        llm: LLMAnalyzer,
        config: Optional[AnalysisConfig] = None,
        commit_limit: int = 200,
        check_badge: bool = True,
    ):
        self.github = github
        self.llm = llm
        self.config = config or AnalysisConfig()
        self.commit_limit = commit_limit
        self.check_badge = check_badge
        self.composer = VerdictComposer(self.config)

    @classmethod
    def from_settings(cls, settings: Settings, offline: bool = False, check_badge: bool = True) -> "Analyzer":
        """Wire collaborators from settings. Raises ConfigurationError on missing credentials."""
        settings.require(offline=offline)
        return cls(
            github=GitHubClient(token=settings.github_token),
            llm=LLMAnalyzer(
                api_key=None if offline else settings.anthropic_api_key,
                model=settings.model,
            ),
            config=settings.analysis_config(),
            commit_limit=settings.commit_limit,
            check_badge=check_badge,
        )

    def analyze(self, repo_url: str) -> Verdict:
        owner, name = parse_repo_url(repo_url)
        logger.info("Analyzing %s/%s", owner, name)

        repo = self.github.get_repository(owner, name)
        commits = self.github.get_commits(owner, name, limit=self.commit_limit)
        logger.debug("Fetched %d commits", len(commits))

        eligibility = check_eligibility(repo.created_at, self.config)
        signals = analyze_commit_patterns(commits, self.config)

        has_marker = None
        if self.check_badge:
            has_marker = self.github.has_marker(
                owner, name, self.config.marker, self.config.marker_files
            )

        response = self.llm.analyze(repo, commits, signals, self.config)
        outcome = normalize_opinion(response, signals, repo, self.config)
        logger.info("Opinion source: %s", outcome.source)

        return self.composer.compose(
            repo_url=repo_url,
            repo=repo,
            signals=signals,
            eligibility=eligibility,
            opinion=outcome.opinion,
            has_marker=has_marker,
        )


def analyze_repository(repo_url: str, settings: Optional[Settings] = None, offline: bool = False) -> Verdict:
    """One-shot convenience wrapper around Analyzer."""
    settings = settings or Settings.from_env()
    return Analyzer.from_settings(settings, offline=offline).analyze(repo_url)
