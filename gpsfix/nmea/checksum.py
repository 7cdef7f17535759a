"""NMEA checksum calculation and validation.

NMEA 0183 sentences use a simple XOR checksum for data integrity verification.
The checksum is calculated over all characters between '$' and '*' (exclusive),
then represented as a two-digit uppercase hexadecimal number after the '*'.

Example sentence structure:
    $GPRMC,080701.00,A,3128.7540,N,14257.6714,W,27.6,107.5,180607,13.1,E,A*2D
    ^                         checksum content                             ^^
    start                                                      checksum (0x2D = 45)

Vendor sentences may omit the checksum entirely; whether that is acceptable
is decided by the caller through ``checksum_optional``.
"""

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def calc_xor_checksum(data: str | bytes, include_all: bool = False) -> int:
    """Calculate the XOR checksum of a sentence or payload.

    The NMEA checksum algorithm XORs the byte value of each character. By
    default a leading '$' is skipped and accumulation stops at '*', so a
    complete sentence can be passed as-is. Accumulation always stops at a
    carriage return or line feed.

    Args:
        data: Sentence text or raw bytes.
        include_all: If True, neither a leading '$' nor a '*' is treated
            specially; every byte up to CR/LF is included.

    Returns:
        Integer checksum value (0-255)

    Example:
        >>> calc_xor_checksum("$GPZDA,125653.00,13,09,2007,00,00*6E")
        110  # 0x6E
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data

    start = 0
    if not include_all and raw[:1] == b"$":
        start = 1

    result = 0
    for byte in raw[start:]:
        if not include_all and byte == ord("*"):
            break
        if byte in (ord("\r"), ord("\n")):
            break
        result ^= byte
    return result


def format_checksum(checksum: int) -> str:
    """Render a checksum as two uppercase hex digits (e.g. 45 -> "2D")."""
    return f"{checksum & 0xFF:02X}"


def _extract_provided_checksum(sentence: str) -> str | None:
    """Return the two characters following '*', or None if there is no '*'.

    Example:
        >>> _extract_provided_checksum("$GPZDA,125653.00,13,09,2007,00,00*6E")
        '6E'
    """
    star = sentence.find("*")
    if star < 0:
        return None
    return sentence[star + 1 : star + 3]


def has_valid_checksum(sentence: str, checksum_optional: bool = False) -> bool:
    """Check a sentence's checksum against the one computed from its payload.

    Args:
        sentence: Complete sentence including '$' and, normally, '*HH'.
            Fields after the checksum (extra data) are allowed.
        checksum_optional: If True, a sentence without any '*' is accepted.
            A checksum that is present is always verified.

    Returns:
        True if the checksum matches, or if it is absent and optional.
        False if:
        - The checksum is absent and mandatory
        - The checksum is truncated or not two hex digits
        - Calculated checksum doesn't match provided checksum
    """
    provided = _extract_provided_checksum(sentence)
    if provided is None:
        return checksum_optional

    if len(provided) != 2 or not set(provided) <= _HEX_DIGITS:
        return False

    return calc_xor_checksum(sentence) == int(provided, 16)


def validate_checksum(sentence: str) -> bool:
    """Validate the checksum of a standard NMEA sentence.

    Performs end-to-end validation by:
    1. Stripping surrounding whitespace/newlines
    2. Requiring the '$' start delimiter and a '*HH' checksum
    3. Comparing the computed XOR of the payload against the checksum

    Args:
        sentence: Complete NMEA sentence including '$', '*', and checksum.
                  May include trailing whitespace/newlines (will be stripped).

    Returns:
        True if the checksum is valid, False otherwise.

    Example:
        >>> validate_checksum("$GPVTG,229.86,T,,M,0.00,N,0.0046,K*55")
        True
        >>> validate_checksum("$GPVTG,229.86,T,,M,0.00,N,0.0046,K*FF")
        False
    """
    sentence = sentence.strip()
    if not sentence.startswith("$"):
        return False
    return has_valid_checksum(sentence, checksum_optional=False)
