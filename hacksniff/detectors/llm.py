"""
LLM Assessment
──────────────
Asks Claude for a narrative read of the repository. The call is best-effort:
any transport, status or empty-reply problem comes back as a failed
LLMResponse rather than an exception, and the opinion normalizer turns that
into the deterministic fallback. No retries.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import anthropic

from hacksniff.config import DEFAULT_MODEL, AnalysisConfig
from hacksniff.models import Commit, CommitSignals, RepositoryInfo

logger = logging.getLogger(__name__)

_SYSTEM = "You are an expert code analyst. You answer with a single JSON object and nothing else."

_PROMPT = """Analyze this GitHub repository for AI-generated patterns and return ONLY a valid JSON object with this exact structure:

{{
  "summary": "A clear 2-3 sentence summary of your analysis",
  "likelihood": 65,
  "keyFindings": [
    "Finding 1 about verification patterns",
    "Finding 2 about commit behavior",
    "Finding 3 about development patterns"
  ],
  "recommendations": [
    "Recommendation 1 for verification",
    "Recommendation 2 for compliance"
  ],
  "confidence": "high"
}}

Repository Data:
- Created: {created}
- Language: {language}
- Size: {size} KB
- Total commits: {total}
- GitHub verified commits: {verified} ({ratio}%)
- Rapid commits: {rapid}

Recent commit messages:
- {messages}

Analysis Guidelines:
- Consider GitHub verification as ONE factor among many (cryptographic signing, not AI indicator)
- Rapid commits ({rapid}) indicate automated development
- Look for patterns in commit messages and timing
- Consider repository age and development velocity
- Look for generic commit messages, file creation patterns, and development velocity
- Base likelihood on OVERALL analysis, not just GitHub verification
- Confidence should reflect certainty of your analysis based on ALL factors

Return ONLY the JSON object, no markdown formatting or additional text."""


@dataclass(frozen=True)
class LLMResponse:
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text and self.text.strip())

    @classmethod
    def success(cls, text: str) -> "LLMResponse":
        return cls(text=text)

    @classmethod
    def failure(cls, error: str) -> "LLMResponse":
        return cls(error=error)


def build_prompt(
    repo: RepositoryInfo,
    commits: List[Commit],
    signals: CommitSignals,
    message_count: int = 15,
) -> str:
    messages = "\n- ".join(c.message for c in commits[:message_count])
    return _PROMPT.format(
        created=repo.created_at.isoformat(),
        language=repo.language or "Unknown",
        size=repo.size,
        total=signals.total_commits,
        verified=signals.verified_commits,
        ratio=signals.verification_ratio,
        rapid=signals.rapid_commit_count,
        messages=messages,
    )


class LLMAnalyzer:
    """Thin wrapper over the Anthropic Messages API."""

    TIMEOUT = 30.0
    MAX_TOKENS = 1024
    TEMPERATURE = 0.3

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_MODEL, client=None):
        self.model = model
        if client is not None:
            self.client = client
        elif api_key:
            self.client = anthropic.Anthropic(api_key=api_key, timeout=self.TIMEOUT, max_retries=0)
        else:
            self.client = None

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def complete(self, prompt: str) -> LLMResponse:
        if not self.enabled:
            return LLMResponse.failure("LLM analysis disabled")

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=_SYSTEM,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            logger.warning("Claude API error (%s): %s", e.status_code, e.message)
            return LLMResponse.failure(f"Claude API error: {e.status_code}")
        except anthropic.APIError as e:
            # Connection failures and timeouts
            logger.warning("Claude request failed: %s", e)
            return LLMResponse.failure(f"Claude request failed: {e}")

        text = "".join(
            getattr(block, "text", "") for block in response.content
            if getattr(block, "type", "text") == "text"
        )
        if not text.strip():
            logger.warning("Claude returned an empty response")
            return LLMResponse.failure("No response from Claude")
        return LLMResponse.success(text)

    def analyze(
        self,
        repo: RepositoryInfo,
        commits: List[Commit],
        signals: CommitSignals,
        config: AnalysisConfig = None,
    ) -> LLMResponse:
        config = config or AnalysisConfig()
        prompt = build_prompt(repo, commits, signals, config.prompt_message_count)
        return self.complete(prompt)
