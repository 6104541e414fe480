from __future__ import annotations


# Relative slack for "already satisfied" checks on normalized scales.
ALMOST_EQUAL = 1.0 - 1e-6
