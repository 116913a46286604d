from payqr.crc import crc16_ccitt


def test_known_answer():
    assert crc16_ccitt("123456789") == "29B1"


def test_accepts_bytes():
    assert crc16_ccitt(b"123456789") == "29B1"


def test_empty_input_returns_initial_register():
    assert crc16_ccitt("") == "FFFF"


def test_output_is_four_uppercase_hex_digits():
    crc = crc16_ccitt("00020101021153037025802SG6304")
    assert len(crc) == 4
    assert crc == crc.upper()
    int(crc, 16)


def test_strings_are_hashed_as_utf8():
    assert crc16_ccitt("café") == crc16_ccitt("café".encode("utf-8"))
