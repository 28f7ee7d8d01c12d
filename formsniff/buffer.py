from __future__ import annotations

CRLF = b"\r\n"


class ByteBuffer:
    """
    Append-only accumulator mixing text and raw binary segments.

    Text is encoded as UTF-8 on write; bytes-like segments are kept as-is,
    so file contents never go through a text codec.
    """

    def __init__(self) -> None:
        self._chunks: list[bytes] = []
        self._size = 0

    def write(self, data: str | bytes | bytearray | memoryview) -> int:
        if isinstance(data, str):
            chunk = data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            chunk = bytes(data)
        else:
            raise TypeError(f"Cannot write {type(data).__name__} to ByteBuffer")
        self._chunks.append(chunk)
        self._size += len(chunk)
        return len(chunk)

    def writeline(self, data: str | bytes | bytearray | memoryview = "") -> int:
        return self.write(data) + self.write(CRLF)

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0
