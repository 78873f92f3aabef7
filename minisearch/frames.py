# minisearch/frames.py
"""
Standalone transcoder between a tagged integer-list text format and a
binary frame format.

Text form, one record per line:
    tag<TAB>v1,v2,v3,...

Binary form, frames back to back (big-endian, no file header):
    [u32 tag_len][u32 payload_len][tag bytes][VarByte payload]

The payload holds the successive deltas of the values (first value
against 0), each VarByte-encoded. Deltas are unsigned 64-bit: a value
lower than its predecessor wraps around, and decoding wraps back, so
non-monotonic and repeated sequences round-trip exactly. Nothing is
sorted or de-duplicated here.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Iterator, List, NamedTuple, Optional

from minisearch.codec import VarByteCodec

_U32 = struct.Struct(">I")
_HEADER = struct.Struct(">II")
U64_MASK = (1 << 64) - 1


class TruncatedFrameError(EOFError):
    """Input ended inside a frame header or body."""


class FrameRecord(NamedTuple):
    tag: bytes
    values: List[int]


def parse_u64(s: bytes) -> Optional[int]:
    """Parse an unsigned 64-bit decimal; None if it is not one."""
    s = s.strip()
    if not s or not s.isdigit():
        return None
    n = int(s)
    if n > U64_MASK:
        return None
    return n


def parse_text_line(line: bytes) -> Optional[FrameRecord]:
    """
    Parse one text line into a FrameRecord.
    Returns None for a line with no tab. Values that do not parse as
    unsigned 64-bit integers are dropped without notice.
    """
    line = line.rstrip(b"\n")
    if line.endswith(b"\r"):
        line = line[:-1]
    parts = line.split(b"\t", 1)
    if len(parts) != 2:
        return None
    tag, nums = parts
    values = []
    for field in nums.split(b","):
        n = parse_u64(field)
        if n is None:
            continue
        values.append(n)
    return FrameRecord(tag, values)


def encode_payload(values: List[int]) -> bytes:
    out = bytearray()
    prev = 0
    for v in values:
        VarByteCodec.encode_number((v - prev) & U64_MASK, out)
        prev = v
    return bytes(out)


def decode_payload(data: bytes) -> List[int]:
    values = []
    prev = 0
    for diff in VarByteCodec.decode(data):
        prev = (prev + diff) & U64_MASK
        values.append(prev)
    return values


def encode_record(tag: bytes, values: List[int]) -> bytes:
    payload = encode_payload(values)
    return _HEADER.pack(len(tag), len(payload)) + tag + payload


def format_record(record: FrameRecord) -> bytes:
    """Render a record back into its text line (with trailing newline)."""
    nums = b",".join(str(v).encode("ascii") for v in record.values)
    return record.tag + b"\t" + nums + b"\n"


class FrameWriter:
    """
    Write FrameRecords as binary frames to an open binary stream.
    """

    def __init__(self, file: BinaryIO):
        self.file = file
        self.frames = 0

    def add(self, tag: bytes, values: List[int]):
        self.file.write(encode_record(tag, values))
        self.frames += 1

    def flush(self):
        self.file.flush()

    def __enter__(self): return self
    def __exit__(self, exc_type, exc, tb):
        self.flush()
        return False


class FrameReader:
    """
    Iterate FrameRecords from a binary stream written by FrameWriter.
    End of input is only accepted on a frame boundary.
    """

    def __init__(self, file: BinaryIO):
        self.file = file

    def _read_exact(self, n: int, what: str) -> bytes:
        b = self.file.read(n)
        if len(b) != n:
            raise TruncatedFrameError(f"Truncated {what}: wanted {n} bytes, got {len(b)}")
        return b

    def __iter__(self) -> Iterator[FrameRecord]:
        return self

    def __next__(self) -> FrameRecord:
        first = self.file.read(4)
        if not first:
            raise StopIteration  # clean EOF
        if len(first) != 4:
            raise TruncatedFrameError("Truncated frame header (tag length)")
        tag_len = _U32.unpack(first)[0]
        payload_len = _U32.unpack(self._read_exact(4, "frame header (payload length)"))[0]
        tag = self._read_exact(tag_len, "tag")
        payload = self._read_exact(payload_len, "payload")
        return FrameRecord(tag, decode_payload(payload))


def encode_stream(text_in: BinaryIO, binary_out: BinaryIO) -> int:
    """Transcode text lines to binary frames. Returns the frame count."""
    with FrameWriter(binary_out) as w:
        for line in text_in:
            rec = parse_text_line(line)
            if rec is None:
                continue
            w.add(rec.tag, rec.values)
    return w.frames


def decode_stream(binary_in: BinaryIO, text_out: BinaryIO) -> int:
    """Transcode binary frames back to text lines. Returns the record count."""
    n = 0
    for rec in FrameReader(binary_in):
        text_out.write(format_record(rec))
        n += 1
    text_out.flush()
    return n
