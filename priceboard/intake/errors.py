"""Intake and moderation errors."""

from __future__ import annotations


class IntakeError(ValueError):
    """Rejected user input; the message is safe to show to the submitter."""


class SubmissionNotFound(LookupError):
    def __init__(self, submission_id: int) -> None:
        super().__init__(f"Submission {submission_id} not found")
        self.submission_id = submission_id
