import base64

import pytest

from sketchify.core.encoding import encode_file, is_data_url, parse_data_url, to_data_url
from sketchify.core.errors import ReadError

from conftest import PNG_BYTES


@pytest.mark.asyncio
async def test_encode_file_returns_data_url(candidate_factory):
    inline = await encode_file(candidate_factory())

    assert inline == "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
    assert is_data_url(inline)


@pytest.mark.asyncio
async def test_reader_failure_becomes_read_error(candidate_factory):
    async def broken():
        raise OSError("disk gone")

    with pytest.raises(ReadError) as exc_info:
        await encode_file(candidate_factory(reader=broken))
    assert "Failed to read the file" in exc_info.value.message


@pytest.mark.asyncio
async def test_empty_read_is_a_read_error(candidate_factory):
    with pytest.raises(ReadError):
        await encode_file(candidate_factory(data=b"", size=10))


def test_parse_data_url_extracts_type_and_bytes():
    mime_type, data = parse_data_url(to_data_url(b"abc", "image/jpeg"))

    assert mime_type == "image/jpeg"
    assert data == b"abc"


@pytest.mark.parametrize(
    "value",
    [
        "https://example.com/a.png",
        "data:image/png;base64",
        "data:image/png,plain-text",
        "data:image/png;base64,@@not-base64@@",
    ],
)
def test_parse_data_url_rejects_malformed_values(value):
    with pytest.raises(ReadError):
        parse_data_url(value)


@pytest.mark.asyncio
async def test_reader_read_error_keeps_its_message(candidate_factory):
    async def mismatched():
        raise ReadError("File size does not match the declared size.")

    with pytest.raises(ReadError) as exc_info:
        await encode_file(candidate_factory(reader=mismatched))
    assert exc_info.value.message == "File size does not match the declared size."
