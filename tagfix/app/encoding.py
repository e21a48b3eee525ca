"""Windows-1252 to Cyrillic codepoint remapping for mis-decoded tag text."""

# Accented Latin-1 block that Windows-1252 reuses for its upper half
WIN1252_START = 0xC0
WIN1252_END = 0xFF

# First codepoint of the basic Cyrillic letters (А)
CYRILLIC_START = 0x0410

OFFSET = CYRILLIC_START - WIN1252_START


def in_win1252_range(codepoint: int) -> bool:
    return WIN1252_START <= codepoint <= WIN1252_END


def remap_codepoint(codepoint: int) -> int:
    if in_win1252_range(codepoint):
        return codepoint + OFFSET
    return codepoint


def win1252_to_cyrillic(text: str) -> str:
    """Shift every legacy-range codepoint of ``text`` into the Cyrillic block.

    Everything outside 0xC0-0xFF passes through unchanged, so already
    correct Cyrillic, ASCII and supplementary-plane characters survive.
    """
    return ''.join(chr(remap_codepoint(ord(char))) for char in text)


def has_win1252(text: str | None) -> bool:
    """Return True if the value contains at least one legacy-range codepoint."""
    if not text:
        return False
    return any(in_win1252_range(ord(char)) for char in text)
