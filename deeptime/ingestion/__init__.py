"""
Ingestion Layer

Raw collaborator items in, parsed intervals and a malformed-item report out.
"""

from .intervals import (
    ParsedInterval, MalformedInterval, IntervalReport, IntervalNormalizer,
)

__all__ = [
    'ParsedInterval',
    'MalformedInterval',
    'IntervalReport',
    'IntervalNormalizer',
]
