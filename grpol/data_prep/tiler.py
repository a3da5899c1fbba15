# -*- coding: utf-8 -*-
"""
Tiler - Partition an image into a row-major grid of tiles.

Tiles do not overlap. Edge tiles are truncated to the image bounds rather
than padded, so every pixel belongs to exactly one tile. Neighbourhood
operators read a halo around each tile with ``Rectangle.expand``.

Author
------
Steven Siebert

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

# Standard library
from typing import Iterator, List, Tuple, Union

# Third-party
import numpy as np

# GRPOL internal
from grpol.data_prep.base import GridBase, Rectangle, _normalize_pair


class Tiler(GridBase):
    """Row-major tile grid over an image.

    Parameters
    ----------
    nrows, ncols : int
        Image dimensions.
    tile_size : int or Tuple[int, int]
        ``(tile_rows, tile_cols)``. If int, square tiles.

    Examples
    --------
    >>> tiler = Tiler(nrows=100, ncols=250, tile_size=64)
    >>> len(tiler)
    8
    >>> tiler.tile_positions()[-1]
    Rectangle(x=192, y=64, width=58, height=36)
    """

    def __init__(
        self,
        nrows: int,
        ncols: int,
        tile_size: Union[int, Tuple[int, int]],
    ) -> None:
        super().__init__(nrows, ncols)
        self._tile_size = _normalize_pair(tile_size, 'tile_size')

    @property
    def tile_size(self) -> Tuple[int, int]:
        """The ``(tile_rows, tile_cols)`` dimensions."""
        return self._tile_size

    @property
    def grid_shape(self) -> Tuple[int, int]:
        """Number of tile rows and tile columns."""
        tr, tc = self._tile_size
        return (int(np.ceil(self._nrows / tr)), int(np.ceil(self._ncols / tc)))

    def tile_positions(self) -> List[Rectangle]:
        """Tile rectangles ordered row-major from the top-left corner."""
        tr, tc = self._tile_size
        tiles = []
        for y in range(0, self._nrows, tr):
            height = min(tr, self._nrows - y)
            for x in range(0, self._ncols, tc):
                tiles.append(Rectangle(x, y, min(tc, self._ncols - x), height))
        return tiles

    def __iter__(self) -> Iterator[Rectangle]:
        return iter(self.tile_positions())

    def __len__(self) -> int:
        rows, cols = self.grid_shape
        return rows * cols

    def __repr__(self) -> str:
        return (f"Tiler(nrows={self._nrows}, ncols={self._ncols}, "
                f"tile_size={self._tile_size})")
