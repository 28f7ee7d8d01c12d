"""Pytest configuration and fixtures."""

import builtins

import pytest

PNG_HEADER = bytes.fromhex("89504E470D0A1A0A0000000D49484452")


@pytest.fixture
def png_file(tmp_path):
    """A file starting with the PNG signature."""
    path = tmp_path / "image.png"
    path.write_bytes(PNG_HEADER + b"\x00\x00\x01\x00" * 8)
    return path


@pytest.fixture
def text_file(tmp_path):
    """A plain UTF-8 text file with a .log extension."""
    path = tmp_path / "server.log"
    path.write_text("2024-01-01 INFO started\n2024-01-01 INFO ready\n", encoding="utf-8")
    return path


@pytest.fixture
def binary_file(tmp_path):
    """A binary blob with every byte value and no known extension."""
    path = tmp_path / "blob.dat"
    path.write_bytes(bytes(range(256)))
    return path


@pytest.fixture
def missing_file(tmp_path):
    """A path that does not exist."""
    return tmp_path / "does-not-exist.png"


@pytest.fixture
def track_open(mocker):
    """Record every handle a formsniff module opens, returning the live list."""
    def track(module):
        handles = []

        def tracking_open(*args, **kwargs):
            handle = builtins.open(*args, **kwargs)
            handles.append(handle)
            return handle

        mocker.patch(f"{module}.open", side_effect=tracking_open, create=True)
        return handles

    return track


@pytest.fixture
def failing_read(mocker):
    """Make `open` in a formsniff module return a handle whose read() fails."""
    def fail(module):
        opener = mocker.mock_open()
        opener.return_value.read.side_effect = OSError("read failed")
        mocker.patch(f"{module}.open", opener, create=True)
        return opener.return_value

    return fail
