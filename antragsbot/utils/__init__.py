"""
Utility package exports
"""

from antragsbot.utils.transcript import (
    format_body,
    format_justification,
    format_description,
    format_summary,
    proposer_from_summary,
    sort_transcript,
    render_slots,
    read_slots,
)

__all__ = [
    "format_body",
    "format_justification",
    "format_description",
    "format_summary",
    "proposer_from_summary",
    "sort_transcript",
    "render_slots",
    "read_slots",
]
