from datetime import datetime, timezone
from typing import Union

from hacksniff.config import AnalysisConfig, parse_timestamp
from hacksniff.models import Eligibility, human_date


def _cutoff_label(cutoff: datetime) -> str:
    return f"{cutoff:%B} {cutoff.day}, {cutoff.year}"


def check_eligibility(created_at: Union[datetime, str], config: AnalysisConfig = None) -> Eligibility:
    """
    Repositories created on or after the hackathon start are eligible.

    A string timestamp that does not parse raises ValueError.
    """
    config = config or AnalysisConfig()
    if isinstance(created_at, str):
        created_at = parse_timestamp(created_at)
    elif created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    cutoff = config.eligibility_cutoff
    label = _cutoff_label(cutoff)
    created = human_date(created_at)

    if created_at < cutoff:
        return Eligibility(
            is_eligible=False,
            reason=f"Repository created on {created}, before hackathon start date ({label})",
        )
    return Eligibility(
        is_eligible=True,
        reason=f"Repository created on {created}, from/after hackathon start date ({label})",
    )
