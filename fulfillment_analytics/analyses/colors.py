"""Color assignment for multi-series charts.

Two strategies are provided behind the :class:`ColorAssigner` protocol:

- :class:`HashColorAssigner` derives the color from a digest of the series
  name, so the same item always gets the same color across refreshes.
- :class:`RandomColorAssigner` draws a uniformly random RGB triple per
  series. Colors change on every recomputation unless a seed is given.

Colors are rendered as Plotly-compatible ``"rgb(r, g, b)"`` strings.
"""

from __future__ import annotations

import hashlib
import random
from typing import Literal, Protocol

ColorMode = Literal["hash", "random"]


def format_rgb(red: int, green: int, blue: int) -> str:
    return f"rgb({red}, {green}, {blue})"


class ColorAssigner(Protocol):
    """Strategy that maps a series name to a color string."""

    def assign(self, series_name: str) -> str: ...


class HashColorAssigner:
    """Deterministic colors from a stable digest of the series name.

    ``hash()`` is salted per process for strings, so a cryptographic digest
    is used instead to keep colors stable across runs.

    Examples
    --------
    >>> assigner = HashColorAssigner()
    >>> assigner.assign("Mug") == HashColorAssigner().assign("Mug")
    True
    """

    def __init__(self, salt: str = "") -> None:
        self.salt = salt

    def assign(self, series_name: str) -> str:
        digest = hashlib.sha256(f"{self.salt}{series_name}".encode("utf-8")).digest()
        return format_rgb(digest[0], digest[1], digest[2])


class RandomColorAssigner:
    """Uniformly random colors, optionally reproducible through ``seed``."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def assign(self, series_name: str) -> str:
        return format_rgb(
            self._rng.randint(0, 255),
            self._rng.randint(0, 255),
            self._rng.randint(0, 255),
        )


def make_color_assigner(mode: ColorMode = "hash", seed: int | None = None) -> ColorAssigner:
    """Build the assigner for a configured color mode.

    Parameters
    ----------
    mode:
        ``"hash"`` for stable colors, ``"random"`` for random draws.
    seed:
        RNG seed for ``"random"`` mode; ignored otherwise.
    """
    if mode == "hash":
        return HashColorAssigner()
    if mode == "random":
        return RandomColorAssigner(seed=seed)
    raise ValueError(f"Unsupported color mode: {mode!r}")
