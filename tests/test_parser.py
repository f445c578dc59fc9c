import pytest

from txdecode import parser
from txdecode.exceptions import InvalidHex, InvalidWitness, TruncatedInput
from txdecode.formats import CompactUint
from txdecode.formats.transaction import TxInput, TxOutput, WitnessItem

TXID = "31811cd355c357e0e01437d9bcf690df824e9ff785012b6115dfae3d8e8b36c1"
P2WPKH_SCRIPT = "001485d78eb795bd9c8a21afefc8b6fdaedf71836809"


@pytest.mark.parametrize(
    "value, width",
    [
        (0, 1),
        (1, 1),
        (252, 1),
        (253, 3),
        (0xFFFF, 3),
        (65536, 5),
        (2 ** 32 - 1, 5),
        (2 ** 32, 9),
    ],
)
def test_read_compact_size(value, width):
    data = b"\xaa" + CompactUint.build(value) + b"\xbb"
    assert parser.read_compact_size(data, 1) == (value, width)


def test_read_compact_field_raw_hex():
    data = bytes.fromhex("fd0001")
    assert parser.read_compact_field(data, 0) == (256, "fd0001", 3)
    data = bytes.fromhex("47")
    assert parser.read_compact_field(data, 0) == (0x47, "47", 1)


def test_read_compact_size_truncated():
    with pytest.raises(TruncatedInput) as e:
        parser.read_compact_size(b"", 0, "input count")
    assert e.value.field == "input count"

    with pytest.raises(TruncatedInput):
        parser.read_compact_size(b"\x01\x02", 2)
    with pytest.raises(TruncatedInput):
        parser.read_compact_size(b"\xfd\x01", 0)
    with pytest.raises(TruncatedInput):
        parser.read_compact_size(b"\xfe\x01\x00\x00", 0)
    with pytest.raises(TruncatedInput):
        parser.read_compact_size(b"\xff" + b"\x00" * 7, 0)


def test_normalize_hex():
    assert parser.normalize_hex("0102 03") == b"\x01\x02\x03"
    assert parser.normalize_hex(" 01\n02\t0a ") == b"\x01\x02\x0a"
    assert parser.normalize_hex("ABcd") == b"\xab\xcd"
    assert parser.normalize_hex("") == b""


@pytest.mark.parametrize("raw_hex", ["invalidhex", "0g", "abc", "01 0", "0x01", "01\u00a002"])
def test_normalize_hex_invalid(raw_hex):
    with pytest.raises(InvalidHex):
        parser.normalize_hex(raw_hex)


def test_parse_input():
    input_hex = TXID + "01000000" + "03" + "515253" + "fdffffff"
    data = bytes.fromhex("ffff" + input_hex + "ffff")
    tx_input, consumed = parser.parse_input(data, 2)
    assert consumed == len(input_hex) // 2
    assert tx_input == TxInput(
        txid=TXID,
        vout="01000000",
        scriptsigsize="03",
        scriptsig="515253",
        sequence="fdffffff",
    )


def test_parse_input_empty_script_sig():
    data = bytes.fromhex(TXID + "00000000" + "00" + "ffffffff")
    tx_input, consumed = parser.parse_input(data, 0)
    assert consumed == 41
    assert tx_input.scriptsigsize == "00"
    assert tx_input.scriptsig == ""


@pytest.mark.parametrize(
    "input_hex, field",
    [
        (TXID[:40], "txid"),
        (TXID + "0100", "vout"),
        (TXID + "01000000", "scriptSig size"),
        (TXID + "01000000" + "fd01", "scriptSig size"),
        (TXID + "01000000" + "05" + "5152", "scriptSig"),
        (TXID + "01000000" + "00" + "fdff", "sequence"),
    ],
)
def test_parse_input_truncated(input_hex, field):
    with pytest.raises(TruncatedInput) as e:
        parser.parse_input(bytes.fromhex(input_hex), 0)
    assert e.value.field == field


def test_parse_output():
    output_hex = "20a1070000000000" + "16" + P2WPKH_SCRIPT
    tx_output, consumed = parser.parse_output(bytes.fromhex(output_hex), 0)
    assert consumed == 31
    assert tx_output == TxOutput(
        amount="20a1070000000000", scriptpubkeysize="16", scriptpubkey=P2WPKH_SCRIPT
    )


@pytest.mark.parametrize(
    "output_hex, field",
    [
        ("20a10700", "amount"),
        ("20a1070000000000", "scriptPubKey size"),
        ("20a1070000000000" + "16" + P2WPKH_SCRIPT[:-2], "scriptPubKey"),
    ],
)
def test_parse_output_truncated(output_hex, field):
    with pytest.raises(TruncatedInput) as e:
        parser.parse_output(bytes.fromhex(output_hex), 0)
    assert e.value.field == field


def test_parse_witness():
    witness_hex = "02" + "02" + "aabb" + "00" + "01" + "03" + "ccddee"
    stacks, consumed = parser.parse_witness(bytes.fromhex(witness_hex), 0, 2)
    assert consumed == len(witness_hex) // 2
    assert len(stacks) == 2

    assert stacks[0].stackitems == "02"
    assert stacks[0].items == [
        WitnessItem(size="02", item="aabb"),
        WitnessItem(size="00", item=""),
    ]
    assert stacks[0].to_dict() == {
        "stackitems": "02",
        "0": {"size": "02", "item": "aabb"},
        "1": {"size": "00", "item": ""},
    }

    assert stacks[1].stackitems == "01"
    assert stacks[1].items == [WitnessItem(size="03", item="ccddee")]


def test_parse_witness_empty_stack():
    stacks, consumed = parser.parse_witness(b"\x00", 0, 1)
    assert consumed == 1
    assert stacks[0].to_dict() == {"stackitems": "00"}


def test_parse_witness_item_too_long():
    with pytest.raises(InvalidWitness):
        parser.parse_witness(bytes.fromhex("01" + "05" + "aabb"), 0, 1)


def test_parse_witness_truncated_counts():
    with pytest.raises(TruncatedInput) as e:
        parser.parse_witness(bytes.fromhex("00"), 0, 2)
    assert e.value.field == "stack item count"

    with pytest.raises(TruncatedInput) as e:
        parser.parse_witness(bytes.fromhex("02" + "01" + "aa"), 0, 1)
    assert e.value.field == "witness item size"
