"""Validation for candidate image files, run before any byte is read."""

from dataclasses import dataclass
from typing import Optional

from sketchify.constants import ALLOWED_MIME_TYPES, MAX_UPLOAD_SIZE, MAX_UPLOAD_SIZE_MIB
from sketchify.core.contexts import CandidateFile
from sketchify.core.errors import TooLarge, UnsupportedType, ValidationError


@dataclass
class ValidationResult:
    error: Optional[ValidationError] = None

    @property
    def accepted(self) -> bool:
        return self.error is None


def validate_file(candidate: CandidateFile) -> ValidationResult:
    """
    Classify a candidate file as accepted or rejected.

    The type check wins over the size check when both fail. Only the declared
    MIME type and size are inspected; ``candidate.reader`` is never called.

    Args:
        candidate: File metadata plus a lazy reader

    Returns:
        ValidationResult with ``error`` set to the rejection reason, if any
    """
    if candidate.mime_type not in ALLOWED_MIME_TYPES:
        return ValidationResult(error=UnsupportedType(candidate.mime_type))

    if candidate.size > MAX_UPLOAD_SIZE:
        return ValidationResult(error=TooLarge(MAX_UPLOAD_SIZE_MIB))

    return ValidationResult()
