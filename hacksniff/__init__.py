"""hacksniff: AI-generation and hackathon eligibility checks for GitHub repositories."""

__version__ = "1.0.0"
