"""Error taxonomy for the ingestion, render and persistence pipeline."""

from typing import Optional


class SketchifyError(Exception):
    """Base class for every pipeline error; ``message`` is safe to show users."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# -------------------------
# Ingestion (recovered at the session boundary)
# -------------------------
class ValidationError(SketchifyError):
    """A candidate file was rejected before any byte was read."""


class UnsupportedType(ValidationError):
    def __init__(self, actual_type: Optional[str]) -> None:
        self.actual_type = actual_type
        super().__init__(
            f"Unsupported file type: {actual_type or 'unknown'}. Allowed: JPG, PNG."
        )


class TooLarge(ValidationError):
    def __init__(self, limit_mib: int) -> None:
        self.limit_mib = limit_mib
        super().__init__(f"File is too large. Max size is {limit_mib} MB.")


class ReadError(SketchifyError):
    def __init__(self, message: str = "Failed to read the file. Please try again.") -> None:
        super().__init__(message)


# -------------------------
# Rendering (surfaced to the caller with a retry)
# -------------------------
class FetchError(SketchifyError):
    def __init__(self, status: Optional[int], reason: str = "") -> None:
        self.status = status
        if status is None:
            message = f"Failed to fetch image: {reason or 'network error'}"
        else:
            message = f"Failed to fetch image: {status} {reason}".rstrip()
        super().__init__(message)


# -------------------------
# Persistence (best-effort, logged and absorbed)
# -------------------------
class HostingUnavailable(SketchifyError):
    def __init__(self, message: str = "Hosting is not available") -> None:
        super().__init__(message)


class UploadFailed(SketchifyError):
    def __init__(self, label: str, reason: str) -> None:
        self.label = label
        super().__init__(f"Failed to host {label} image: {reason}")


class KvWriteFailed(SketchifyError):
    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Failed to save {key}: {reason}")


class MissingSourceImage(SketchifyError):
    def __init__(self) -> None:
        super().__init__("Source image is missing; cannot create project payload.")


class ProjectCreationFailed(SketchifyError):
    def __init__(self, project_id: Optional[str]) -> None:
        self.project_id = project_id
        super().__init__(f"Failed to create project {project_id or ''}".rstrip())
