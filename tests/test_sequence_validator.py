# Properties of the structural UTF-8 validator.
# Run: pytest -q

from utf8probe.core import REJECT, SINGLE, SequenceValidator, classify_byte, validate


def check(*values):
    data = bytes(values)
    return validate(data, len(data))

def test_empty_sequence_is_valid():
    assert validate(b"", 0)
    assert validate(b"\xff\x80", 0)

def test_negative_length_rejected():
    assert validate(b"abc", -1) is False
    assert validate(b"", -1) is False

def test_length_beyond_buffer_rejected():
    assert validate(b"ab", 3) is False

def test_ascii_bytes_accepted_except_nul():
    for b in range(1, 0x80):
        assert check(b), hex(b)
    assert check(0x00) is False

def test_nul_policy_is_configurable():
    lenient = SequenceValidator(reject_nul=False)
    assert lenient.validate(b"\x00", 1)
    assert lenient.validate(b"a\x00b", 3)
    assert SequenceValidator().validate(b"a\x00b", 3) is False

def test_two_byte_forms():
    for lead in range(0xC2, 0xE0):
        assert check(lead, 0x80), hex(lead)
        assert check(lead) is False  # truncated
        assert check(lead, 0x41) is False  # bad continuation

def test_overlong_two_byte_leads_rejected():
    # 0xC0 0x80 would be an overlong NUL
    assert check(0xC0, 0x80) is False
    assert check(0xC1, 0xBF) is False

def test_three_byte_forms():
    assert check(0xE0, 0x80, 0x80)
    # U+20AC EURO SIGN
    assert check(0xE2, 0x82, 0xAC)
    assert check(0xE0, 0x80) is False
    assert check(0xE2, 0x82, 0x41) is False
    assert check(0xE2, 0x41, 0xAC) is False

def test_four_byte_forms():
    assert check(0xF0, 0x90, 0x80, 0x80)
    # U+1F600
    assert check(0xF0, 0x9F, 0x98, 0x80)
    assert check(0xF4, 0x8F, 0xBF, 0xBF)
    assert check(0xF5, 0x80, 0x80, 0x80) is False
    assert check(0xF0, 0x90, 0x80) is False
    assert check(0xF0, 0x41, 0x80, 0x80) is False
    assert check(0xF0, 0x90, 0x41, 0x80) is False
    assert check(0xF0, 0x90, 0x80, 0x41) is False

def test_invalid_lead_bytes():
    assert check(0x80) is False  # lone continuation
    assert check(0xBF) is False
    for lead in range(0xF5, 0x100):
        assert check(lead, 0x80, 0x80, 0x80) is False, hex(lead)

def test_structural_only_no_surrogate_check():
    # ED A0 80 encodes U+D800; only the lead-byte exclusions apply
    assert check(0xED, 0xA0, 0x80)

def test_declared_length_limits_scan():
    # The trailing lone continuation byte lies beyond the declared length
    assert validate(b"ab\x80", 2)
    assert validate(b"\xc3\xa9\xc3", 2)
    assert validate(b"\xc3\xa9\xc3", 3) is False

def test_first_violation_short_circuits():
    assert validate(b"abc\xc3\x28def", 8) is False

def test_concatenation_of_valid_sequences():
    parts = ["héllo".encode("utf-8"), "€uro".encode("utf-8"), "😀".encode("utf-8"), b"plain"]
    for a in parts:
        for b in parts:
            joined = a + b
            assert validate(a, len(a)) and validate(b, len(b))
            assert validate(joined, len(joined))

def test_repeated_calls_agree():
    data = bytearray(b"\xe2\x82\xac \xc3")
    first = validate(data, len(data))
    assert validate(data, len(data)) == first
    assert validate(data, 4) is True

def test_accepts_int_sequences_and_memoryview():
    assert validate([0xC3, 0xA9], 2)
    assert validate(memoryview(b"\xc3\xa9"), 2)

def test_classify_byte_modes():
    assert classify_byte(0x41) == SINGLE
    assert classify_byte(0x00) == REJECT
    assert classify_byte(0x00, reject_nul=False) == SINGLE
    assert classify_byte(0xC2) == 1
    assert classify_byte(0xC1) == REJECT
    assert classify_byte(0xEF) == 2
    assert classify_byte(0xF4) == 3
    assert classify_byte(0xF5) == REJECT
    assert classify_byte(0x9F) == REJECT
