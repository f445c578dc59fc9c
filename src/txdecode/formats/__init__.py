import construct as c


def Optional(subcon):
    """Custom version of Optional which fixes construct issue #760"""
    select = c.Select(subcon, c.Pass)
    select.flagbuildnone = True
    return select


CompactUintStruct = c.Struct(
    "base" / c.Int8ul,
    "ext" / c.Switch(c.this.base, {0xFD: c.Int16ul, 0xFE: c.Int32ul, 0xFF: c.Int64ul}),
)
"""Struct for Bitcoin's Compact uint / varint"""


class CompactUintAdapter(c.Adapter):
    """Adapter for Bitcoin's Compact uint / varint"""

    def _encode(self, obj, context, path):
        if obj < 0xFD:
            return {"base": obj, "ext": None}
        if obj < 2 ** 16:
            return {"base": 0xFD, "ext": obj}
        if obj < 2 ** 32:
            return {"base": 0xFE, "ext": obj}
        if obj < 2 ** 64:
            return {"base": 0xFF, "ext": obj}
        raise ValueError("Value too big for compact uint")

    def _decode(self, obj, context, path):
        # non-canonical encodings such as fd0000 decode to their literal value
        if obj["ext"] is None:
            return obj["base"]
        return obj["ext"]


class ConstFlag(c.Adapter):
    """Constant value that might or might not be present.

    When parsing, if the appropriate value is found, it is consumed and
    this field set to True.
    When building, if True, the constant is inserted, otherwise it is omitted.
    """

    def __init__(self, const):
        self.const = const
        super().__init__(
            c.IfThenElse(
                c.this._building,
                c.Select(c.Bytes(len(self.const)), c.Pass),
                Optional(c.Const(const)),
            )
        )

    def _encode(self, obj, context, path):
        return self.const if obj else None

    def _decode(self, obj, context, path):
        return obj is not None


CompactUint = CompactUintAdapter(CompactUintStruct)
"""Bitcoin Compact uint construct.

Encodes an int as either:
- a single byte the value is smaller than 253 (0xFD)
- 0xFD + uint16 if the value fits into uint16
- 0xFE + uint32 if the value fits into uint32
- 0xFF + uint64 if the value is bigger.
"""

RawCompactUint = c.RawCopy(CompactUint)
"""Compact uint that also keeps its raw encoding.

Parses into a container with `value` (the decoded int), `data` (the 1, 3, 5 or
9 bytes it was read from) and `length`.
"""



class HexAdapter(c.Adapter):
    """Bytes shown as a lowercase hex string, in the order they appear on wire."""

    def _encode(self, obj, context, path):
        return bytes.fromhex(obj)

    def _decode(self, obj, context, path):
        return obj.hex()


def HexBytes(length):
    """Fixed or context-dependent number of bytes, parsed into hex."""
    return HexAdapter(c.Bytes(length))


SEGWIT_MARKER_FLAG = b"\x00\x01"

SegwitFlag = ConstFlag(SEGWIT_MARKER_FLAG)
"""Segwit marker and flag bytes following the transaction version."""
