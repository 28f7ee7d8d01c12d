"""Tests for formsniff.sniffer module."""

from pathlib import Path

import pytest
from loguru import logger

from formsniff.signatures import Signature
from formsniff.sniffer import (
    DEFAULT_MIME_TYPE,
    TEXT_MIME_TYPE,
    Sniffer,
    file_extension,
    sniff,
)


@pytest.fixture
def captured_logs():
    """Collect formsniff debug messages for the duration of a test."""
    messages = []
    logger.enable("formsniff")
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
    logger.disable("formsniff")


class TestFileExtension:
    """Tests for file_extension helper."""

    def test_lowercases_extension(self):
        """Test extension is returned lowercase without the dot."""
        assert file_extension("photos/Holiday.PNG") == "png"

    def test_last_suffix_only(self):
        """Test only the final suffix counts."""
        assert file_extension("backup.tar.gz") == "gz"

    def test_no_extension(self):
        """Test paths without an extension yield an empty string."""
        assert file_extension("Makefile") == ""
        assert file_extension("/home/user/.bashrc") == ""

    def test_accepts_path_objects(self):
        """Test os.PathLike values are supported."""
        assert file_extension(Path("a") / "b.JPeG") == "jpeg"


class TestSignatureMatch:
    """Tests for the signature step."""

    def test_png_signature(self, png_file):
        """Test PNG magic number resolves to image/png."""
        assert sniff(png_file) == "image/png"

    def test_extension_matched_case_insensitively(self, tmp_path, png_file):
        """Test an uppercase extension still selects the PNG entry."""
        upper = tmp_path / "SHOUTY.PNG"
        upper.write_bytes(png_file.read_bytes())
        assert sniff(upper) == "image/png"

    def test_str_path(self, png_file):
        """Test plain string paths are accepted."""
        assert sniff(str(png_file)) == "image/png"

    def test_later_candidate_matches(self, tmp_path):
        """Test a JPEG with an EXIF marker matches its second candidate."""
        path = tmp_path / "photo.jpg"
        path.write_bytes(bytes.fromhex("FFD8FFE1") + b"\x00\x10Exif\x00\x00")
        assert sniff(path) == "image/jpeg"

    def test_signature_at_offset(self, tmp_path):
        """Test signatures located past the start of the file."""
        path = tmp_path / "bundle.tar"
        path.write_bytes(b"\x00" * 257 + b"ustar\x0000" + b"\x00" * 100)
        assert sniff(path) == "application/x-tar"

    def test_riff_container(self, tmp_path):
        """Test WEBP detected through its RIFF form type at offset 8."""
        path = tmp_path / "picture.webp"
        path.write_bytes(b"RIFF\x24\x00\x00\x00WEBPVP8 \x00\x00")
        assert sniff(path) == "image/webp"

    def test_signature_beats_text_heuristic(self, tmp_path):
        """Test a textual file with a signature keeps the signature type."""
        path = tmp_path / "index.html"
        path.write_text("<!DOCTYPE html><html><body>hi</body></html>")
        assert sniff(path) == "text/html"

    def test_shared_signature_resolved_by_extension(self, tmp_path):
        """Test ZIP-based formats are told apart by extension only."""
        payload = bytes.fromhex("504B0304") + b"\x14\x00\x00\x00" + b"\x00" * 20
        docx = tmp_path / "report.docx"
        odt = tmp_path / "report.odt"
        epub = tmp_path / "book.epub"
        for path in (docx, odt, epub):
            path.write_bytes(payload)

        assert sniff(docx) == (
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        )
        assert sniff(odt) == "application/vnd.oasis.opendocument.text"
        assert sniff(epub) == "application/epub+zip"

    def test_lookup_gated_by_extension(self, tmp_path, png_file):
        """Test PNG bytes under a .jpg name are not reported as PNG."""
        path = tmp_path / "mislabelled.jpg"
        path.write_bytes(png_file.read_bytes())
        # No JPEG candidate matches and the data has null bytes,
        # so the extension table decides.
        assert sniff(path) == "image/jpeg"

    def test_offset_beyond_eof_is_no_match(self, tmp_path):
        """Test a file shorter than the signature offset does not raise."""
        path = tmp_path / "tiny.iso"
        path.write_bytes(b"CD001")
        sniffer = Sniffer()
        assert sniffer.match_signature(path) is None
        assert sniffer.sniff(path) == TEXT_MIME_TYPE

    def test_first_listed_candidate_wins(self, tmp_path):
        """Test candidates are evaluated in table order."""
        table = {
            "bin": Signature(((0, "CAFE"), (0, "CAFEBABE")), "application/x-first"),
        }
        path = tmp_path / "thing.bin"
        path.write_bytes(bytes.fromhex("CAFEBABE"))
        sniffer = Sniffer(signatures=table, extensions={})
        assert sniffer.sniff(path) == "application/x-first"

    def test_lowercase_hex_in_custom_table(self, tmp_path):
        """Test custom tables may spell signatures in lowercase."""
        table = {"foo": Signature(((2, "beef"),), "application/x-foo")}
        path = tmp_path / "a.foo"
        path.write_bytes(b"\x00\x00\xbe\xef")
        assert Sniffer(signatures=table).match_signature(path) == "application/x-foo"

    def test_unreadable_file_is_no_match(self, missing_file):
        """Test a missing file yields no signature match."""
        assert Sniffer().match_signature(missing_file) is None


class TestTextHeuristic:
    """Tests for the null-byte text heuristic."""

    def test_log_file_is_text(self, text_file):
        """Test text without null bytes is text/plain."""
        assert sniff(text_file) == TEXT_MIME_TYPE

    def test_text_heuristic_precedes_extension_table(self, tmp_path):
        """Test a .json file without a signature is reported as text/plain."""
        path = tmp_path / "data.json"
        path.write_text('{"a": 1}')
        assert sniff(path) == TEXT_MIME_TYPE

    def test_empty_file_is_text(self, tmp_path):
        """Test an empty file has no null byte and counts as text."""
        path = tmp_path / "empty.bin"
        path.write_bytes(b"")
        assert sniff(path) == TEXT_MIME_TYPE

    def test_null_byte_inside_window(self, tmp_path):
        """Test a null byte at the last scanned position disqualifies text."""
        path = tmp_path / "edge.dat"
        path.write_bytes(b"a" * 127 + b"\x00")
        assert Sniffer().looks_like_text(path) is False

    def test_null_byte_outside_window(self, tmp_path):
        """Test a null byte after the first 128 bytes is ignored."""
        path = tmp_path / "late.dat"
        path.write_bytes(b"a" * 128 + b"\x00")
        assert Sniffer().looks_like_text(path) is True

    def test_custom_window(self, tmp_path):
        """Test window size is configurable."""
        path = tmp_path / "short.dat"
        path.write_bytes(b"abcd\x00")
        assert Sniffer(window=4).looks_like_text(path) is True
        assert Sniffer(window=5, chunk_size=2).looks_like_text(path) is False

    def test_looks_like_text_raises_for_missing_file(self, missing_file):
        """Test the heuristic itself propagates OSError."""
        with pytest.raises(OSError):
            Sniffer().looks_like_text(missing_file)

    def test_read_failure_short_circuits_to_default(self, mocker, tmp_path):
        """Test read failure returns the binary default, skipping extensions."""
        path = tmp_path / "doc.pdf"
        path.write_bytes(b"not really a pdf")
        mocker.patch.object(Sniffer, "looks_like_text", side_effect=OSError("boom"))
        assert Sniffer().sniff(path) == DEFAULT_MIME_TYPE

    @pytest.mark.parametrize("window,chunk_size", [(0, 16), (128, 0), (-1, -1)])
    def test_invalid_sizes(self, window, chunk_size):
        """Test non-positive sizes are rejected."""
        with pytest.raises(ValueError):
            Sniffer(window=window, chunk_size=chunk_size)


class TestFallbacks:
    """Tests for extension and default fallbacks."""

    def test_extension_table_for_binary(self, tmp_path):
        """Test binary data without a signature uses the extension table."""
        path = tmp_path / "broken.docx"
        path.write_bytes(b"\x00\x01\x02\x03")
        assert sniff(path) == (
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        )

    def test_unknown_binary_defaults(self, binary_file):
        """Test binary data with an unknown extension is octet-stream."""
        assert sniff(binary_file) == DEFAULT_MIME_TYPE

    def test_missing_file_defaults(self, missing_file):
        """Test a nonexistent path resolves without raising."""
        assert sniff(missing_file) == DEFAULT_MIME_TYPE

    def test_directory_defaults(self, tmp_path):
        """Test a directory path resolves without raising."""
        assert sniff(tmp_path) == DEFAULT_MIME_TYPE

    def test_custom_extension_table(self, binary_file):
        """Test the extension table can be swapped per instance."""
        sniffer = Sniffer(extensions={"dat": "application/x-custom"})
        assert sniffer.sniff(binary_file) == "application/x-custom"

    def test_no_caching(self, tmp_path):
        """Test each call re-reads the file."""
        path = tmp_path / "changing.png"
        path.write_bytes(b"\x00\x00\x00")
        assert sniff(path) == "image/png"  # via extension table
        path.write_bytes(b"plain words")
        assert sniff(path) == TEXT_MIME_TYPE


class TestLogging:
    """Tests for sniffer debug logging."""

    def test_logs_signature_match(self, captured_logs, png_file):
        """Test a signature hit is logged at debug level."""
        sniff(png_file)
        assert any("matched signature" in message for message in captured_logs)

    def test_logs_read_failure(self, captured_logs, missing_file):
        """Test fallback reasons are logged."""
        sniff(missing_file)
        assert any("Text scan failed" in message for message in captured_logs)


class TestHandleRelease:
    """Tests that file handles are closed on every exit path."""

    def test_closed_after_signature_match(self, track_open, png_file):
        """Test the handle is closed when a candidate matches early."""
        handles = track_open("formsniff.sniffer")
        assert Sniffer().match_signature(png_file) == "image/png"
        assert len(handles) == 1
        assert handles[0].closed

    def test_closed_after_null_byte(self, track_open, binary_file):
        """Test the handle is closed when the scan stops at a null byte."""
        handles = track_open("formsniff.sniffer")
        assert Sniffer().looks_like_text(binary_file) is False
        assert len(handles) == 1
        assert handles[0].closed

    def test_all_closed_after_full_sniff(self, track_open, binary_file):
        """Test every step of the chain releases its handle."""
        handles = track_open("formsniff.sniffer")
        sniff(binary_file)
        assert handles
        assert all(handle.closed for handle in handles)

    def test_closed_when_signature_read_fails(self, failing_read):
        """Test a read error during signature matching still closes the file."""
        handle = failing_read("formsniff.sniffer")
        assert Sniffer().match_signature("photo.png") is None
        handle.__exit__.assert_called_once()

    def test_closed_when_text_scan_read_fails(self, failing_read):
        """Test a read error during the text scan still closes the file."""
        handle = failing_read("formsniff.sniffer")
        with pytest.raises(OSError, match="read failed"):
            Sniffer().looks_like_text("notes.txt")
        handle.__exit__.assert_called_once()
