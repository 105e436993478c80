# src/particle_life/utils/random.py

from __future__ import annotations

from typing import Dict, Hashable
import numpy as np

_master_seed: int | None = None
_rngs: Dict[str, np.random.Generator] = {}


def seed_all(seed: int | None) -> None:
    """
    Set the master seed for all RNG usage in the project.

    - If seed is None: RNGs will be entropy-seeded (non-reproducible).
    - Resets cached named RNGs.
    """
    global _master_seed, _rngs
    _master_seed = seed
    _rngs.clear()


def rng(name: str = "particles") -> np.random.Generator:
    """
    Return a named global RNG stream (order-dependent draws within that stream).
    Streams in use: "types" (interaction matrices), "particles" (placement),
    "color" (hue offset).
    """
    global _rngs
    if name not in _rngs:
        if _master_seed is None:
            _rngs[name] = np.random.default_rng()
        else:
            ss = np.random.SeedSequence([_master_seed, _stable_int(name)])
            _rngs[name] = np.random.default_rng(ss)
    return _rngs[name]


def _stable_int(x: Hashable) -> int:
    """
    Convert arbitrary key -> stable 32-bit integer without relying on Python's hash().
    """
    s = repr(x).encode("utf-8", errors="surrogatepass")
    h = 2166136261
    for b in s:
        h ^= b
        h = (h * 16777619) & 0xFFFFFFFF
    return h
