"""Pipeline constants shared by ingestion, rendering and persistence."""

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png")

MAX_UPLOAD_SIZE_MIB = 50
MAX_UPLOAD_SIZE = MAX_UPLOAD_SIZE_MIB * 1024 * 1024

# Simulated progress: one tick every interval, the last tick clamps to 100
PROGRESS_INTERVAL_MS = 100
PROGRESS_STEP = 15
REDIRECT_DELAY_MS = 600

FETCH_TIMEOUT_SECONDS = 60.0

SOURCE_LABEL = "source"
RENDERED_LABEL = "rendered"

# Draft-only fields that never reach the finalized project record
DERIVED_PATH_FIELDS = ("source_path", "rendered_path", "public_path")
