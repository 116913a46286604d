import pytest

from payqr.payload import build_payload
from payqr.presets import emvco_preset
from payqr.schemas import TLV
from payqr.services.errors import ServiceError
from payqr.services.inspector import inspect_payload


def test_inspect_generated_payload():
    config = emvco_preset("paynow")
    config.additional_data_62 = [TLV(id="01", value="INV-1")]
    payload = build_payload(config)

    result = inspect_payload(payload)

    assert result.crc_valid
    assert result.crc == payload[-4:]
    assert [item.tag for item in result.items] == ["00", "01", "53", "58", "59", "60", "26", "62", "63"]
    scheme = result.items[6]
    assert [(child.tag, child.value) for child in scheme.children] == [
        ("00", "A000000677010112"),
        ("01", "UEN12345678"),
    ]
    assert scheme.length == 35
    assert [(child.tag, child.value) for child in result.items[7].children] == [("01", "INV-1")]
    assert result.items[0].children == []


def test_inspect_detects_crc_mismatch():
    payload = build_payload(emvco_preset("paynow")).replace("SINGAPORE", "SINGAPORF")
    result = inspect_payload(payload)
    assert not result.crc_valid
    assert result.expected_crc != result.crc


@pytest.mark.parametrize("payload", ["000201ZZ", "000201010211", "0002010102116305ABCDE"])
def test_inspect_rejects_malformed_payloads(payload):
    with pytest.raises(ServiceError) as exc:
        inspect_payload(payload)
    assert exc.value.code == "ERR_BAD_PAYLOAD"
