"""
Module: session

Purpose:
    Session state for one exam: answer key, roster, labels, the draft
    answer sheet and the JSON snapshot that persists them.

Key Classes:
    - ExamSession: Explicit session state object
    - AnswerKeyStore / RosterStore: The only writers of key and roster
    - AnswerSheetDraft: In-progress answer sheet
    - SnapshotStore: JSON snapshot persistence
"""

from .draft import AnswerSheetDraft
from .state import AnswerKeyStore, ExamSession, RosterStore
from .store import SnapshotSaveError, SnapshotStore

__all__ = [
    "AnswerKeyStore",
    "AnswerSheetDraft",
    "ExamSession",
    "RosterStore",
    "SnapshotSaveError",
    "SnapshotStore",
]
