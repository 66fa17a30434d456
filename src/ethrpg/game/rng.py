"""Deterministic battle seeding: 32-bit FNV-1a + mulberry32.

Both routines work on unsigned 32-bit integers so a battle replays bit-for-bit
wherever it is computed, including against battles cached by the web client.
"""
from ethrpg.game.constants import FNV_OFFSET_BASIS, FNV_PRIME

MASK_32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK_32


def fnv1a(text: str) -> int:
    """32-bit FNV-1a over UTF-16 code units (identical to bytes for ASCII input)."""
    data = text.encode("utf-16-le")
    h = FNV_OFFSET_BASIS
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, FNV_PRIME)
    return h


class Mulberry32:
    """Callable PRNG; each call returns the next float in [0, 1)."""

    def __init__(self, seed: int):
        self.state = seed & MASK_32

    def __call__(self) -> float:
        self.state = (self.state + 0x6D2B79F5) & MASK_32
        s = self.state
        t = _imul(s ^ (s >> 15), 1 | s)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & MASK_32) ^ t
        return (t ^ (t >> 14)) / 4294967296


def generate_battle_seed(addr1: str, addr2: str, nonce: str) -> str:
    """Battle seed as 8 lowercase hex chars; addresses are case-insensitive."""
    digest = fnv1a(f"{addr1.lower()}{addr2.lower()}{nonce}")
    return f"{digest:08x}"


def rng_from_seed(battle_seed: str) -> Mulberry32:
    return Mulberry32(int(battle_seed, 16))
