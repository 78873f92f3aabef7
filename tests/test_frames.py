# tests/test_frames.py
import io

import pytest

from minisearch.codec import TruncatedPayloadError
from minisearch.frames import (
    FrameReader, FrameRecord, TruncatedFrameError, decode_payload, decode_stream,
    encode_payload, encode_record, encode_stream, parse_text_line,
)


@pytest.mark.parametrize("values", [
    [],
    [0],
    [0, 0, 0],
    [1, 2, 3],
    [5, 5, 10, 3],           # repeats and a decrease are kept as-is
    [100, 1, 50],
    [(1 << 64) - 1, 0],
])
def test_payload_roundtrip(values):
    assert decode_payload(encode_payload(values)) == values


def test_record_layout_is_big_endian():
    frame = encode_record(b"ab", [1, 3])
    # [u32 tag_len=2][u32 payload_len=2]["ab"][0x81 0x82]
    assert frame == b"\x00\x00\x00\x02\x00\x00\x00\x02ab\x81\x82"


def test_zero_encodes_as_single_terminator_byte():
    assert encode_payload([0]) == b"\x80"


def test_reader_roundtrip_with_repeats():
    buf = io.BytesIO(encode_record(b"t1", [5, 5, 10, 3]) + encode_record(b"t2", [0]))
    records = list(FrameReader(buf))
    assert records == [FrameRecord(b"t1", [5, 5, 10, 3]), FrameRecord(b"t2", [0])]


def test_empty_input_has_no_frames():
    assert list(FrameReader(io.BytesIO(b""))) == []


@pytest.mark.parametrize("cut", [1, 3, 4, 6, 9, 11])
def test_truncated_frame(cut):
    data = encode_record(b"ab", [1, 3])  # 12 bytes
    with pytest.raises(TruncatedFrameError):
        list(FrameReader(io.BytesIO(data[:cut])))


def test_unterminated_payload_is_an_error():
    data = b"\x00\x00\x00\x01\x00\x00\x00\x02t\x85\x01"
    with pytest.raises(TruncatedPayloadError):
        list(FrameReader(io.BytesIO(data)))


@pytest.mark.parametrize("line,expected", [
    (b"t1\t1,2,3\n", FrameRecord(b"t1", [1, 2, 3])),
    (b"t1\t 1 , x,3\r\n", FrameRecord(b"t1", [1, 3])),
    (b"t1\t-1,+2,4\n", FrameRecord(b"t1", [4])),
    (b"t1\t18446744073709551616,7\n", FrameRecord(b"t1", [7])),
    (b"t1\t\n", FrameRecord(b"t1", [])),
    (b"t1\tx\ty\n", FrameRecord(b"t1", [])),
    (b"no tab here\n", None),
])
def test_parse_text_line(line, expected):
    assert parse_text_line(line) == expected


def test_stream_transcode_roundtrip():
    text = b"a\t1,5,9\nskipped line\nb\t5,5,10,3\n\xe3\x81\x82\t0\n"
    binary = io.BytesIO()
    assert encode_stream(io.BytesIO(text), binary) == 3

    out = io.BytesIO()
    assert decode_stream(io.BytesIO(binary.getvalue()), out) == 3
    assert out.getvalue() == b"a\t1,5,9\nb\t5,5,10,3\n\xe3\x81\x82\t0\n"
