"""
GS1 EAN module patterns.

Every pattern is written as modules from left to right, ``1`` for a bar
and ``0`` for a space. Index ``d`` of a digit table is the encoding of
digit ``d``.
"""

from types import MappingProxyType

# Left-hand odd parity
L_PATTERNS = (
    "0001101", "0011001", "0010011", "0111101", "0100011",
    "0110001", "0101111", "0111011", "0110111", "0001011",
)

# Left-hand even parity
G_PATTERNS = (
    "0100111", "0110011", "0011011", "0100001", "0011101",
    "0111001", "0000101", "0010001", "0001001", "0010111",
)

# Right-hand
R_PATTERNS = (
    "1110010", "1100110", "1101100", "1000010", "1011100",
    "1001110", "1010000", "1000100", "1001000", "1110100",
)

PARITY_TABLES = MappingProxyType({
    "L": L_PATTERNS,
    "G": G_PATTERNS,
    "R": R_PATTERNS,
})

# L/G sequence of the six left-hand EAN-13 digits, indexed by the implicit first digit
FIRST_DIGIT_PARITY = (
    "LLLLLL", "LLGLGG", "LLGGLG", "LLGGGL", "LGLLGG",
    "LGGLLG", "LGGGLL", "LGLGLG", "LGLGGL", "LGGLGL",
)

START_GUARD = "101"
MIDDLE_GUARD = "01010"
END_GUARD = "101"

DIGIT_WIDTH = 7

# Shortest module stream worth handing to each decoder
EAN13_MIN_MODULES = 59
EAN8_MIN_MODULES = 43

# Full symbol widths in modules, quiet zones excluded
EAN13_MODULES = len(START_GUARD) + 12 * DIGIT_WIDTH + len(MIDDLE_GUARD) + len(END_GUARD)
EAN8_MODULES = len(START_GUARD) + 8 * DIGIT_WIDTH + len(MIDDLE_GUARD) + len(END_GUARD)


def _build_lookup(parity: str) -> MappingProxyType:
    return MappingProxyType({pattern: digit for digit, pattern in enumerate(PARITY_TABLES[parity])})


# pattern -> digit, per parity class
DIGIT_LOOKUP = MappingProxyType({parity: _build_lookup(parity) for parity in PARITY_TABLES})

# L/G sequence -> implicit first digit
FIRST_DIGIT_LOOKUP = MappingProxyType({
    parity: digit for digit, parity in enumerate(FIRST_DIGIT_PARITY)
})
