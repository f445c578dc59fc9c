import logging

from .exceptions import TrailingData
from .parser import normalize_hex, parse_transaction

LOG = logging.getLogger(__name__)


def decode_transaction(raw_hex, strict=False):
    """Decode a hex-encoded transaction into a `Transaction` record.

    Whitespace in `raw_hex` is ignored. Bytes left over after the locktime are
    ignored as well, unless `strict` is set.
    """
    data = normalize_hex(raw_hex)
    tx, consumed = parse_transaction(data)
    if consumed < len(data):
        if strict:
            raise TrailingData(len(data) - consumed)
        LOG.debug(f"Ignoring {len(data) - consumed} bytes after locktime")
    return tx


def decode(raw_hex, strict=False, indent=2):
    """Decode a hex-encoded transaction into pretty-printed JSON."""
    return decode_transaction(raw_hex, strict=strict).to_json(indent=indent)
