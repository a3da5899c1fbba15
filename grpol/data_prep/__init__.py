# -*- coding: utf-8 -*-
"""
Data Preparation Module - Tile index computation.

Tile planners return index bounds (``Rectangle`` named tuples), not pixel
data.

Key Classes
-----------
- Rectangle: Named tuple for pixel regions, with halo expansion
- GridBase: ABC for image dimension management
- Tiler: Row-major non-overlapping tile grid

Usage
-----
    >>> from grpol.data_prep import Tiler
    >>> for rect in Tiler(nrows=1000, ncols=2000, tile_size=256):
    ...     block = image[rect.slices]

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-06

Modified
--------
2026-03-06
"""

from grpol.data_prep.base import GridBase, Rectangle
from grpol.data_prep.tiler import Tiler

__all__ = [
    'GridBase',
    'Rectangle',
    'Tiler',
]
