import os
import tempfile

import pytest

# Keep test runs from writing the application log into the working tree
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "sketchify-tests.log"))

from sketchify.core.contexts import CandidateFile  # noqa: E402

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def make_candidate(
    name="plan.png",
    mime_type="image/png",
    size=None,
    data=PNG_BYTES,
    reader=None,
):
    async def default_reader():
        return data

    return CandidateFile(
        name=name,
        mime_type=mime_type,
        size=len(data) if size is None else size,
        reader=reader or default_reader,
    )


@pytest.fixture
def candidate_factory():
    return make_candidate
