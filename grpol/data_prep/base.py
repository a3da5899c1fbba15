# -*- coding: utf-8 -*-
"""
Data Preparation Base - Shared types for tile index computation.

Defines the ``Rectangle`` named tuple used for every tile and source
region, and the ``GridBase`` abstract base class that manages image
dimensions for tile planners.

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

# Standard library
from abc import ABC
from typing import NamedTuple, Tuple, Union

# Third-party
import numpy as np

# GRPOL internal
from grpol.exceptions import ValidationError


class Rectangle(NamedTuple):
    """Axis-aligned pixel rectangle in image coordinates.

    Use directly for numpy slicing::

        block = image[rect.slices]

    Attributes
    ----------
    x : int
        First column.
    y : int
        First row.
    width : int
        Number of columns.
    height : int
        Number of rows.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def shape(self) -> Tuple[int, int]:
        """``(rows, cols)`` of the rectangle."""
        return (self.height, self.width)

    @property
    def origin(self) -> Tuple[int, int]:
        """``(row, col)`` of the first pixel."""
        return (self.y, self.x)

    @property
    def slices(self) -> Tuple[slice, slice]:
        return (slice(self.y, self.y + self.height),
                slice(self.x, self.x + self.width))

    def columns(self) -> np.ndarray:
        """Image column index of every column in the rectangle."""
        return np.arange(self.x, self.x + self.width)

    def expand(
        self, halo_x: int, halo_y: int, image_shape: Tuple[int, int]
    ) -> 'Rectangle':
        """Grow by a halo on every side, clamped to the image.

        Parameters
        ----------
        halo_x, halo_y : int
            Columns and rows added on each side.
        image_shape : Tuple[int, int]
            ``(nrows, ncols)`` of the image.

        Returns
        -------
        Rectangle
        """
        nrows, ncols = image_shape
        x0 = max(self.x - halo_x, 0)
        y0 = max(self.y - halo_y, 0)
        x1 = min(self.x + self.width + halo_x, ncols)
        y1 = min(self.y + self.height + halo_y, nrows)
        return Rectangle(x0, y0, x1 - x0, y1 - y0)

    def within(self, outer: 'Rectangle') -> Tuple[slice, slice]:
        """Slices selecting this rectangle from an array covering *outer*."""
        r0 = self.y - outer.y
        c0 = self.x - outer.x
        return (slice(r0, r0 + self.height), slice(c0, c0 + self.width))


class GridBase(ABC):
    """Base class for tile index computation over a bounded image.

    Parameters
    ----------
    nrows : int
        Number of rows in the image.
    ncols : int
        Number of columns in the image.

    Raises
    ------
    TypeError
        If ``nrows`` or ``ncols`` is not ``int``.
    ValidationError
        If ``nrows`` or ``ncols`` is not positive.
    """

    def __init__(self, nrows: int, ncols: int) -> None:
        if not isinstance(nrows, (int, np.integer)) or \
                not isinstance(ncols, (int, np.integer)):
            raise TypeError(
                f"nrows and ncols must be int, got "
                f"nrows={type(nrows).__name__}, ncols={type(ncols).__name__}"
            )
        if nrows <= 0 or ncols <= 0:
            raise ValidationError(
                f"nrows and ncols must be positive, got "
                f"nrows={nrows}, ncols={ncols}"
            )
        self._nrows = int(nrows)
        self._ncols = int(ncols)

    @property
    def nrows(self) -> int:
        return self._nrows

    @property
    def ncols(self) -> int:
        return self._ncols

    @property
    def shape(self) -> Tuple[int, int]:
        """Image dimensions as ``(nrows, ncols)``."""
        return (self._nrows, self._ncols)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nrows={self._nrows}, ncols={self._ncols})"


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _normalize_pair(
    value: Union[int, Tuple[int, int]], name: str
) -> Tuple[int, int]:
    """Convert an int or (int, int) tuple to a validated (rows, cols) pair.

    Raises
    ------
    TypeError
        If value is not int or tuple of two ints.
    ValidationError
        If any element is not positive.
    """
    if isinstance(value, bool):
        raise TypeError(f"{name} must be int or Tuple[int, int], got bool")
    if isinstance(value, int):
        if value <= 0:
            raise ValidationError(f"{name} must be positive, got {value}")
        return (value, value)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        r, c = value
        if not isinstance(r, int) or not isinstance(c, int):
            raise TypeError(f"{name} tuple elements must be int")
        if r <= 0 or c <= 0:
            raise ValidationError(
                f"{name} elements must be positive, got ({r}, {c})"
            )
        return (r, c)
    raise TypeError(
        f"{name} must be int or Tuple[int, int], got {type(value).__name__}"
    )
