import pytest

from payqr.tlv import (
    TLVItem,
    byte_length,
    encode_container,
    encode_items,
    encode_tag,
    length_field,
    parse_tlv,
)


def test_length_counts_utf8_bytes():
    assert byte_length("café") == 5
    assert length_field("café") == "05"
    assert length_field("") == "00"


def test_encode_tag():
    assert encode_tag("00", "01") == "000201"
    assert encode_tag("59", "HUGGS-M WALK") == "5912HUGGS-M WALK"
    assert encode_tag("59", "café") == "5905café"


def test_encode_items_trims_and_drops_empty_values():
    items = [TLVItem("00", " SG.SGQR "), TLVItem("01", "   "), TLVItem("02", "")]
    assert encode_items(items) == "0007SG.SGQR"


def test_encode_container_nests_inner_items():
    items = [TLVItem("00", "SG.SGQR"), TLVItem("01", "20091902F9D4")]
    assert encode_container("51", items) == "51270007SG.SGQR011220091902F9D4"


def test_encode_container_omits_empty_body():
    assert encode_container("26", [TLVItem("00", ""), TLVItem("01", " ")]) == ""
    assert encode_container("26", []) == ""


def test_parse_tlv_uses_byte_lengths():
    items = list(parse_tlv("0002015905café6002SG"))
    assert items == [TLVItem("00", "01"), TLVItem("59", "café"), TLVItem("60", "SG")]


@pytest.mark.parametrize("payload", ["000501", "000201ZZ", "00XX01"])
def test_parse_tlv_rejects_malformed_payload(payload):
    with pytest.raises(ValueError):
        list(parse_tlv(payload))
