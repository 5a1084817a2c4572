"""Deterministic non-cryptographic 128-bit hash for plan identifiers"""

MASK_32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply"""
    return (a * b) & MASK_32


def hash128_hex(value: str) -> str:
    """
    cyrb128 over the string's code points, rendered as 32 lowercase hex chars.

    Four 32-bit lanes are mixed per character and then finalized; identical
    input always yields identical output on every platform.
    """
    h1, h2, h3, h4 = 1779033703, 3144134277, 1013904242, 2773480762

    for ch in value:
        k = ord(ch)
        h1 = h2 ^ _imul(h1 ^ k, 597399067)
        h2 = h3 ^ _imul(h2 ^ k, 2869860233)
        h3 = h4 ^ _imul(h3 ^ k, 951274213)
        h4 = h1 ^ _imul(h4 ^ k, 2716044179)

    h1 = _imul(h3 ^ (h1 >> 18), 597399067)
    h2 = _imul(h4 ^ (h2 >> 22), 2869860233)
    h3 = _imul(h1 ^ (h3 >> 17), 951274213)
    h4 = _imul(h2 ^ (h4 >> 19), 2716044179)

    return "".join(f"{h:08x}" for h in (h1, h2, h3, h4))
