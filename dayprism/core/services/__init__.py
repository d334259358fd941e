"""Core services: response classification and day aggregation.

The orchestrator is imported from :mod:`dayprism.core.services.orchestrator`
directly since it depends on the provider layer, which in turn uses the
classifier.
"""

from dayprism.core.services.aggregator import aggregate, day_key, parse_float, parse_int
from dayprism.core.services.classifier import classify, classify_body, decode_payload

__all__ = [
    "aggregate",
    "classify",
    "classify_body",
    "day_key",
    "decode_payload",
    "parse_float",
    "parse_int",
]
