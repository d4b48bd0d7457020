"""
Module: scoring

Purpose:
    Scoring engine and results projection. Pure functions, recomputed on
    every render from the current key and roster.

Key Functions:
    - score(): Tags + percentage for one answer vector
    - score_student(): ScoredStudent for one student
    - project(): Stable, locale-aware ordering of the roster
    - project_scored(): Ordered ScoredStudent tuple
"""

from .engine import format_percentage, percentage_of, score, score_student, tag_answer
from .projector import collation_key, project, project_scored

__all__ = [
    "collation_key",
    "format_percentage",
    "percentage_of",
    "project",
    "project_scored",
    "score",
    "score_student",
    "tag_answer",
]
