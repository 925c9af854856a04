"""Tests for the verdict composer."""

import pytest

from hacksniff.detectors.scoring import INELIGIBLE_MARKER, VerdictComposer
from hacksniff.models import AIOpinion, CommitSignals, Eligibility

ELIGIBLE = Eligibility(True, "Repository created on Sun Jun 01 2025, from/after hackathon start date (May 31, 2025)")
INELIGIBLE = Eligibility(False, "Repository created on Sun Dec 01 2024, before hackathon start date (May 31, 2025)")

SIGNALS = CommitSignals(
    total_commits=20,
    verified_commits=15,
    verification_ratio=75,
    rapid_commit_count=4,
    file_patterns=("High GitHub verification rate pattern",),
)


def _opinion(likelihood=50, confidence="medium"):
    return AIOpinion(
        summary="Mixed signals.",
        likelihood=likelihood,
        key_findings=("a",),
        recommendations=("b",),
        confidence=confidence,
    )


@pytest.fixture
def composer():
    return VerdictComposer()


class TestAutomationThreshold:

    @pytest.mark.parametrize("likelihood,expected", [(0, False), (70, False), (71, True), (100, True)])
    def test_boundary(self, composer, repo_after_cutoff, likelihood, expected):
        verdict = composer.compose("u", repo_after_cutoff, SIGNALS, ELIGIBLE, _opinion(likelihood))
        assert verdict.is_likely_automated is expected
        assert verdict.likelihood == likelihood


class TestPassThrough:

    def test_confidence_comes_from_opinion(self, composer, repo_after_cutoff):
        # likelihood alone would say "low"; the opinion's tier wins
        verdict = composer.compose("u", repo_after_cutoff, SIGNALS, ELIGIBLE, _opinion(10, "high"))
        assert verdict.confidence == "high"

    def test_fields(self, composer, repo_after_cutoff):
        opinion = _opinion(64)
        verdict = composer.compose(
            "https://github.com/octo/after", repo_after_cutoff, SIGNALS, ELIGIBLE, opinion, has_marker=True
        )
        assert verdict.repo_url == "https://github.com/octo/after"
        assert verdict.signals is SIGNALS
        assert verdict.opinion is opinion
        assert verdict.is_eligible
        assert verdict.has_marker is True
        assert verdict.eligibility_reason == ELIGIBLE.reason


class TestDetails:

    def test_order_with_marker(self, composer, repo_after_cutoff):
        verdict = composer.compose("u", repo_after_cutoff, SIGNALS, ELIGIBLE, _opinion(64), has_marker=False)
        assert verdict.details == (
            "Repository analyzed: 20 total commits",
            "GitHub verified commits: 15 (75%)",
            "Rapid commit sequences: 4",
            "AI likelihood assessment: 64%",
            "Bolt.new badge not found in source code",
            "Repository created: Sun Jun 01 2025",
            ELIGIBLE.reason,
        )

    def test_marker_line_omitted_when_not_checked(self, composer, repo_after_cutoff):
        verdict = composer.compose("u", repo_after_cutoff, SIGNALS, ELIGIBLE, _opinion())
        assert not any("Bolt.new" in d for d in verdict.details)
        assert len(verdict.details) == 6

    def test_marker_detected(self, composer, repo_after_cutoff):
        verdict = composer.compose("u", repo_after_cutoff, SIGNALS, ELIGIBLE, _opinion(), has_marker=True)
        assert "Bolt.new badge detected in source code" in verdict.details

    def test_ineligible_marker_first(self, composer, repo_before_cutoff):
        verdict = composer.compose("u", repo_before_cutoff, SIGNALS, INELIGIBLE, _opinion())
        assert verdict.details[0] == INELIGIBLE_MARKER
        assert verdict.details[-1] == INELIGIBLE.reason
        assert verdict.details.count(INELIGIBLE_MARKER) == 1


class TestToDict:

    def test_wire_shape(self, composer, repo_after_cutoff):
        verdict = composer.compose("u", repo_after_cutoff, SIGNALS, ELIGIBLE, _opinion(72, "high"), has_marker=True)
        payload = verdict.to_dict()
        assert payload["verificationPercentage"] == 72
        assert payload["isLikelyAIGenerated"] is True
        assert payload["hasBoltNewBadge"] is True
        assert payload["commitPatterns"] == {
            "rapidCommits": 4,
            "filePatterns": ["High GitHub verification rate pattern"],
            "timePatterns": [],
            "verifiedCommits": 15,
            "totalCommits": 20,
            "githubVerifiedPercentage": 75,
        }
        assert payload["aiAnalysis"]["keyFindings"] == ["a"]
        assert payload["eligibilityReason"] == ELIGIBLE.reason

    def test_badge_key_absent_when_unchecked(self, composer, repo_after_cutoff):
        verdict = composer.compose("u", repo_after_cutoff, SIGNALS, ELIGIBLE, _opinion())
        assert "hasBoltNewBadge" not in verdict.to_dict()
