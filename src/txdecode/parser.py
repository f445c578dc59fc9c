"""Readers for the individual parts of a serialized transaction.

Each reader takes the whole transaction as `bytes` plus the offset to start at,
and returns what it parsed together with the number of bytes consumed. The
caller owns the cursor and advances it by that number.
"""
import io
import logging
import re

import construct as c

from .exceptions import InvalidHex, InvalidWitness, TruncatedInput
from .formats import RawCompactUint, SEGWIT_MARKER_FLAG
from .formats.transaction import (
    Transaction,
    TxHeader,
    TxInput,
    TxLockTime,
    TxOutput,
    WitnessStack,
)

LOG = logging.getLogger(__name__)

WHITESPACE = re.compile(r"[ \t\r\n]")

HEADER_FIELDS = {"version": "version"}
INPUT_FIELDS = {
    "txid": "txid",
    "vout": "vout",
    "scriptsigsize": "scriptSig size",
    "scriptsig": "scriptSig",
    "sequence": "sequence",
}
OUTPUT_FIELDS = {
    "amount": "amount",
    "scriptpubkeysize": "scriptPubKey size",
    "scriptpubkey": "scriptPubKey",
}
WITNESS_FIELDS = {
    "stackitems": "stack item count",
    "size": "witness item size",
    "item": "witness item",
}
LOCKTIME_FIELDS = {"locktime": "locktime"}


def normalize_hex(raw_hex):
    """Strip ASCII whitespace from `raw_hex` and decode it into bytes."""
    try:
        return bytes.fromhex(WHITESPACE.sub("", raw_hex))
    except ValueError as e:
        raise InvalidHex(f"Invalid hex: {e}") from e


def failed_field(error, fields, default):
    """Name the innermost known field on the construct path of `error`."""
    names = [n for n in (error.path or "").split(" -> ") if n in fields]
    return fields[names[-1]] if names else default


def parse_at(subcon, data, offset, fields, default="compact size"):
    """Parse `subcon` at `offset`, returning the parsed value and its length."""
    stream = io.BytesIO(data)
    stream.seek(offset)
    try:
        raw = c.RawCopy(subcon).parse_stream(stream)
    except c.StreamError as e:
        raise TruncatedInput(failed_field(e, fields, default)) from e
    return raw.value, raw.length


def read_compact_field(data, offset, field="compact size"):
    """Read a compact uint at `offset`.

    Returns a tuple of the decoded value, the hex of its encoding and the number
    of bytes consumed (1, 3, 5 or 9).
    """
    raw, consumed = parse_at(RawCompactUint, data, offset, {}, field)
    return raw.value, raw.data.hex(), consumed


def read_compact_size(data, offset, field="compact size"):
    value, _, consumed = read_compact_field(data, offset, field)
    return value, consumed


def parse_input(data, offset):
    obj, consumed = parse_at(TxInput.SUBCON, data, offset, INPUT_FIELDS)
    return TxInput.from_parsed(obj), consumed


def parse_output(data, offset):
    obj, consumed = parse_at(TxOutput.SUBCON, data, offset, OUTPUT_FIELDS)
    return TxOutput.from_parsed(obj), consumed


def parse_witness(data, offset, input_count):
    """Read one witness stack per input."""
    pos = offset
    stacks = []
    for n in range(input_count):
        try:
            obj, consumed = parse_at(WitnessStack.SUBCON, data, pos, WITNESS_FIELDS)
        except TruncatedInput as e:
            if e.field != WITNESS_FIELDS["item"]:
                raise
            raise InvalidWitness(
                f"Invalid witness data: item of input {n} is longer than "
                f"the remaining data"
            ) from e
        pos += consumed
        LOG.debug(f"Witness for input {n}: {len(obj.stack)} items")
        stacks.append(WitnessStack.from_parsed(obj))

    return stacks, pos - offset


def parse_transaction(data, offset=0):
    """Parse a complete transaction starting at `offset`."""
    header, pos = parse_at(TxHeader, data, offset, HEADER_FIELDS)
    pos += offset
    if header.segwit:
        marker, flag = SEGWIT_MARKER_FLAG[:1].hex(), SEGWIT_MARKER_FLAG[1:].hex()
    else:
        marker = flag = ""
    LOG.debug(f"Transaction version {header.version}, segwit: {header.segwit}")

    input_count, inputcount, size = read_compact_field(data, pos, "input count")
    pos += size
    inputs = []
    for _ in range(input_count):
        tx_input, size = parse_input(data, pos)
        inputs.append(tx_input)
        pos += size
    LOG.debug(f"Read {input_count} inputs, offset {pos}")

    output_count, outputcount, size = read_compact_field(data, pos, "output count")
    pos += size
    outputs = []
    for _ in range(output_count):
        tx_output, size = parse_output(data, pos)
        outputs.append(tx_output)
        pos += size
    LOG.debug(f"Read {output_count} outputs, offset {pos}")

    if header.segwit:
        witness, size = parse_witness(data, pos, input_count)
        pos += size
    else:
        witness = []

    tail, size = parse_at(TxLockTime, data, pos, LOCKTIME_FIELDS)
    pos += size

    tx = Transaction(
        version=header.version,
        marker=marker,
        flag=flag,
        inputcount=inputcount,
        inputs=inputs,
        outputcount=outputcount,
        outputs=outputs,
        witness=witness,
        locktime=tail.locktime,
    )
    return tx, pos - offset
