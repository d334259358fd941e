"""Upstream data providers."""

from dayprism.core.providers.alpha_vantage import (
    PROVIDER_NAME,
    AlphaVantageProvider,
    last_completed_month,
)

__all__ = ["PROVIDER_NAME", "AlphaVantageProvider", "last_completed_month"]
