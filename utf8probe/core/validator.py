"""Structural UTF-8 sequence validation."""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

ByteBuffer = Union[bytes, bytearray, memoryview, Sequence[int]]

# Byte classes: negative rejects, zero is a single-byte form, 1..3 is the
# number of continuation bytes a lead byte expects.
REJECT = -1
SINGLE = 0

_FORBIDDEN_OVERLONG = (0xC0, 0xC1)
_MAX_LEAD = 0xF4


def classify_byte(byte: int, reject_nul: bool = True) -> int:
    """Return the class of ``byte`` when it appears where a lead byte is expected."""
    if byte == 0:
        return REJECT if reject_nul else SINGLE
    if byte & 0x80 == 0:
        return SINGLE
    if byte & 0xE0 == 0xC0 and byte not in _FORBIDDEN_OVERLONG:
        return 1
    if byte & 0xF0 == 0xE0:
        return 2
    if byte & 0xF8 == 0xF0 and byte <= _MAX_LEAD:
        return 3
    return REJECT


def is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


@dataclass(frozen=True)
class SequenceValidator:
    """Single-pass checker for well-formed single and multi-byte forms.

    ``reject_nul`` treats an embedded NUL byte as malformed. The check is
    structural only: surrogates and non-shortest 3/4-byte forms are not
    detected beyond the fixed lead-byte exclusions.
    """

    reject_nul: bool = True

    def validate(self, buffer: ByteBuffer, length: Optional[int] = None) -> bool:
        """Return True if the first ``length`` bytes of ``buffer`` are well formed.

        ``length`` defaults to the whole buffer. A negative length, or one
        longer than the buffer, is rejected rather than scanned.
        """
        if length is None:
            length = len(buffer)
        if length < 0 or length > len(buffer):
            return False

        pos = 0
        while pos < length:
            expected = classify_byte(buffer[pos], self.reject_nul)
            pos += 1
            if expected == REJECT:
                return False
            if pos + expected > length:
                return False
            for _ in range(expected):
                if not is_continuation(buffer[pos]):
                    return False
                pos += 1
        return True


_DEFAULT = SequenceValidator()


def validate(buffer: ByteBuffer, length: Optional[int] = None) -> bool:
    """Validate ``buffer`` with the default policy (embedded NUL rejected)."""
    return _DEFAULT.validate(buffer, length)
