"""
minisearch/codec.py

Postings compression.

Two layers:
  - gap (delta) encoding of a sorted, de-duplicated docid list:
        gaps[0] = docids[0]
        gaps[i] = docids[i] - docids[i-1]
  - VarByte encoding of non-negative integers, 7 bits per byte,
    most significant group first. The *last* byte of each integer has
    its MSB (0x80) set; every earlier byte has it clear. 0 -> b"\\x80".

Postings are persisted through a codec back end, chosen by name:
    "gaps"    -> payload is the plain gap list (pickled by the store)
    "varbyte" -> payload is the VarByte bytes of the gap list
Both back ends round-trip to the same docid list, so the index store and
the searcher never need to know which one produced a payload.
"""

from __future__ import annotations

from typing import Iterable, List


class TruncatedPayloadError(ValueError):
    """A VarByte stream ended before the terminating byte of a value."""


def unique_sorted(values: Iterable[int]) -> List[int]:
    """Sort ascending and drop consecutive duplicates."""
    out: List[int] = []
    for v in sorted(values):
        if not out or v != out[-1]:
            out.append(v)
    return out


def encode_gaps(docids: List[int]) -> List[int]:
    """Absolute first docid, then successive differences."""
    if not docids:
        return []
    gaps = [docids[0]]
    for i in range(1, len(docids)):
        gaps.append(docids[i] - docids[i - 1])
    return gaps


def decode_gaps(gaps: List[int]) -> List[int]:
    """Cumulative sum; inverse of encode_gaps()."""
    docids: List[int] = []
    prev = 0
    for g in gaps:
        prev += g
        docids.append(prev)
    return docids


class VarByteCodec:
    """
    VarByte integer codec (MSB-first groups, terminator bit on the last byte).

    All integers must be non-negative.
    """

    @staticmethod
    def encode_number(x: int, out: bytearray) -> None:
        # Encode non-negative integer x into out (append).
        if x < 0:
            raise ValueError(f"VarByte cannot encode negative value {x}")
        groups = [x & 0x7F]
        x >>= 7
        while x:
            groups.append(x & 0x7F)
            x >>= 7
        groups.reverse()
        groups[-1] |= 0x80  # terminator on the last byte
        out.extend(groups)

    @classmethod
    def encode(cls, values: Iterable[int]) -> bytes:
        out = bytearray()
        for v in values:
            cls.encode_number(v, out)
        return bytes(out)

    @staticmethod
    def decode(data: bytes) -> List[int]:
        res: List[int] = []
        cur = 0
        pending = False
        for b in data:
            cur = (cur << 7) | (b & 0x7F)
            if b & 0x80:
                res.append(cur)
                cur = 0
                pending = False
            else:
                pending = True
        if pending:
            raise TruncatedPayloadError(
                f"VarByte stream ends inside a value after {len(res)} complete values"
            )
        return res


class GapCodec:
    """Plain gap list back end."""
    name = "gaps"

    def encode(self, docids: List[int]) -> List[int]:
        return encode_gaps(docids)

    def decode(self, payload) -> List[int]:
        return decode_gaps(list(payload))


class VarByteGapCodec:
    """Gap list compressed with VarByte."""
    name = "varbyte"

    def encode(self, docids: List[int]) -> bytes:
        return VarByteCodec.encode(encode_gaps(docids))

    def decode(self, payload) -> List[int]:
        return decode_gaps(VarByteCodec.decode(bytes(payload)))


CODECS = {
    GapCodec.name: GapCodec,
    VarByteGapCodec.name: VarByteGapCodec,
}


def get_codec(name: str):
    try:
        return CODECS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown postings codec {name!r}; expected one of {sorted(CODECS)}") from None
