"""CRC-16/CCITT-FALSE implementation used for the EMV tag 63 trailer."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def crc16_ccitt(data: str | bytes) -> str:
    """Compute CRC-16/CCITT-FALSE and return it as 4 uppercase hex digits.

    Polynomial 0x1021, initial register 0xFFFF, no reflection and no final
    XOR. Strings are encoded as UTF-8 before hashing.
    """

    raw = data.encode("utf-8") if isinstance(data, str) else data
    checksum = CRC16_INIT
    for byte in raw:
        checksum ^= byte << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return f"{checksum:04X}"
