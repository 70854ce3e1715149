"""
Shared utilities for resumetyp.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps for log and output directories
"""

from resumetyp.utils.timestamp import now, today

__all__ = ["now", "today"]
