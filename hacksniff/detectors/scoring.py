from typing import Optional

from hacksniff.config import AnalysisConfig
from hacksniff.models import AIOpinion, CommitSignals, Eligibility, RepositoryInfo, Verdict, human_date

INELIGIBLE_MARKER = "⚠️ Repository not eligible for hackathon"


class VerdictComposer:
    """
    Verdict Composer
    ────────────────
    Merges the four inputs into the final verdict:

      signals      : counters from the commit pattern analyzer
      eligibility  : hackathon cutoff check
      opinion      : normalized AI opinion (Claude or the fallback)
      has_marker   : bolt.new badge presence, None when the check was skipped

    The opinion's likelihood is the headline score. Heuristic signals only
    feed the opinion; they never override it here.
    """

    def __init__(self, config: AnalysisConfig = None):
        self.config = config or AnalysisConfig()

    def details(
        self,
        signals: CommitSignals,
        eligibility: Eligibility,
        opinion: AIOpinion,
        repo: RepositoryInfo,
        has_marker: Optional[bool] = None,
    ) -> list:
        details = [
            f"Repository analyzed: {signals.total_commits} total commits",
            f"GitHub verified commits: {signals.verified_commits} ({signals.verification_ratio}%)",
            f"Rapid commit sequences: {signals.rapid_commit_count}",
            f"AI likelihood assessment: {opinion.likelihood}%",
        ]
        if has_marker is not None:
            details.append(f"Bolt.new badge {'detected' if has_marker else 'not found'} in source code")
        details.append(f"Repository created: {human_date(repo.created_at)}")
        details.append(eligibility.reason)

        if not eligibility.is_eligible:
            details.insert(0, INELIGIBLE_MARKER)
        return details

    def compose(
        self,
        repo_url: str,
        repo: RepositoryInfo,
        signals: CommitSignals,
        eligibility: Eligibility,
        opinion: AIOpinion,
        has_marker: Optional[bool] = None,
    ) -> Verdict:
        likelihood = opinion.likelihood
        return Verdict(
            repo_url=repo_url,
            likelihood=likelihood,
            is_likely_automated=likelihood > self.config.automation_threshold,
            is_eligible=eligibility.is_eligible,
            has_marker=has_marker,
            signals=signals,
            confidence=opinion.confidence,
            details=tuple(self.details(signals, eligibility, opinion, repo, has_marker)),
            opinion=opinion,
            eligibility_reason=eligibility.reason,
        )
