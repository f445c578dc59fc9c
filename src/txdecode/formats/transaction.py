import json
import typing

import attr
import construct as c

from . import HexBytes, RawCompactUint, SegwitFlag
from ..exceptions import SerializationError


@attr.s(auto_attribs=True)
class TxInput:
    """Transaction input.

    `txid` is kept in wire order, i.e. reversed compared to how block explorers
    display transaction hashes.
    """

    txid: str
    vout: str
    scriptsigsize: str
    scriptsig: str
    sequence: str

    SUBCON = c.Struct(
        "txid" / HexBytes(32),
        "vout" / HexBytes(4),
        "scriptsigsize" / RawCompactUint,
        "scriptsig" / HexBytes(c.this.scriptsigsize.value),
        "sequence" / HexBytes(4),
    )

    @classmethod
    def from_parsed(cls, obj):
        return cls(
            txid=obj.txid,
            vout=obj.vout,
            scriptsigsize=obj.scriptsigsize.data.hex(),
            scriptsig=obj.scriptsig,
            sequence=obj.sequence,
        )

    def to_dict(self):
        return attr.asdict(self)

    def to_hex(self):
        return self.txid + self.vout + self.scriptsigsize + self.scriptsig + self.sequence


@attr.s(auto_attribs=True)
class TxOutput:
    """Transaction output. `amount` is the little-endian satoshi value as on wire."""

    amount: str
    scriptpubkeysize: str
    scriptpubkey: str

    SUBCON = c.Struct(
        "amount" / HexBytes(8),
        "scriptpubkeysize" / RawCompactUint,
        "scriptpubkey" / HexBytes(c.this.scriptpubkeysize.value),
    )

    @classmethod
    def from_parsed(cls, obj):
        return cls(
            amount=obj.amount,
            scriptpubkeysize=obj.scriptpubkeysize.data.hex(),
            scriptpubkey=obj.scriptpubkey,
        )

    def to_dict(self):
        return attr.asdict(self)

    def to_hex(self):
        return self.amount + self.scriptpubkeysize + self.scriptpubkey


@attr.s(auto_attribs=True)
class WitnessItem:
    size: str
    item: str

    SUBCON = c.Struct(
        "size" / RawCompactUint,
        "item" / HexBytes(c.this.size.value),
    )

    @classmethod
    def from_parsed(cls, obj):
        return cls(size=obj.size.data.hex(), item=obj.item)

    def to_dict(self):
        return attr.asdict(self)

    def to_hex(self):
        return self.size + self.item


@attr.s(auto_attribs=True)
class WitnessStack:
    """Witness records of a single input."""

    stackitems: str
    items: typing.List[WitnessItem] = attr.Factory(list)

    SUBCON = c.Struct(
        "stackitems" / RawCompactUint,
        "stack" / c.Array(c.this.stackitems.value, WitnessItem.SUBCON),
    )

    @classmethod
    def from_parsed(cls, obj):
        return cls(
            stackitems=obj.stackitems.data.hex(),
            items=[WitnessItem.from_parsed(i) for i in obj.stack],
        )

    def to_dict(self):
        """Items are keyed by their index within the stack, next to the count."""
        d = {"stackitems": self.stackitems}
        for i, item in enumerate(self.items):
            d[str(i)] = item.to_dict()
        return d

    def to_hex(self):
        return self.stackitems + "".join(item.to_hex() for item in self.items)


TxHeader = c.Struct(
    "version" / HexBytes(4),
    "segwit" / SegwitFlag,
)
"""Transaction version, followed by the segwit marker and flag if present.

The marker and flag are recognized purely by position. A legacy transaction with
no inputs and a single output starts with the same bytes and is read as segwit.
"""

TxLockTime = c.Struct("locktime" / HexBytes(4))


@attr.s(auto_attribs=True)
class Transaction:
    """Decoded Bitcoin transaction.

    Every field holds the hex of the bytes it was read from, length prefixes
    included, so that the record is an annotated copy of the wire format.
    `marker` and `flag` are empty strings for legacy transactions, in which case
    `witness` is empty too.
    """

    version: str
    marker: str
    flag: str
    inputcount: str
    inputs: typing.List[TxInput]
    outputcount: str
    outputs: typing.List[TxOutput]
    witness: typing.List[WitnessStack]
    locktime: str

    @property
    def segwit(self):
        return bool(self.marker or self.flag)

    def to_dict(self):
        return dict(
            version=self.version,
            marker=self.marker,
            flag=self.flag,
            inputcount=self.inputcount,
            inputs=[i.to_dict() for i in self.inputs],
            outputcount=self.outputcount,
            outputs=[o.to_dict() for o in self.outputs],
            witness=[w.to_dict() for w in self.witness],
            locktime=self.locktime,
        )

    def to_json(self, indent=2):
        if self.witness and len(self.witness) != len(self.inputs):
            raise SerializationError(
                f"{len(self.witness)} witness stacks for {len(self.inputs)} inputs"
            )
        try:
            return json.dumps(self.to_dict(), indent=indent)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"JSON serialization error: {e}") from e

    def to_hex(self):
        parts = [self.version, self.marker, self.flag, self.inputcount]
        parts.extend(i.to_hex() for i in self.inputs)
        parts.append(self.outputcount)
        parts.extend(o.to_hex() for o in self.outputs)
        parts.extend(w.to_hex() for w in self.witness)
        parts.append(self.locktime)
        return "".join(parts)

    def to_bytes(self):
        return bytes.fromhex(self.to_hex())
