"""Lightweight dataclasses shared across the ingestion and persistence helpers."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from sketchify.core.errors import ValidationError


@dataclass
class CandidateFile:
    name: str
    mime_type: Optional[str]
    size: int
    reader: Callable[[], Awaitable[bytes]]


@dataclass
class UploadSessionState:
    selected_file: Optional[CandidateFile] = None
    dragging: bool = False
    progress: int = 0
    error: Optional[ValidationError] = None

    def to_dict(self) -> dict:
        return {
            "file": self.selected_file.name if self.selected_file else None,
            "dragging": self.dragging,
            "progress": self.progress,
            "error": self.error.message if self.error else None,
        }


@dataclass
class HostingConfig:
    bucket: str
    public_base_url: str


@dataclass
class HostedAsset:
    url: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.url is not None
