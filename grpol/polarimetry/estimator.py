# -*- coding: utf-8 -*-
"""
Windowed Matrix Estimator - Multilooked covariance and coherency matrices.

Forms the per-pixel polarimetric matrix of the requested target kind and
averages it over a rectangular sliding window. Near the image border the
window is clamped to the image, and the mean divides by the number of
pixels actually inside the clamped window::

    count = (x_end - x_start + 1) * (y_end - y_start + 1)
    x_start = max(x - half_width, 0),  x_end = min(x + half_width, W - 1)

Window sums use ``scipy.ndimage.uniform_filter`` with zero padding, so
only the sum of in-image pixels survives and the clamped count restores
the exact mean. When a tile is processed the count is taken from the
full-image bounds, not from the tile, so tiled and whole-image results
agree.

The basis change (for example C4 to T3) is applied to every pixel before
averaging.

Dependencies
------------
scipy

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
2026-02-18

Modified
--------
2026-03-04
"""

# Standard library
import logging
from typing import NamedTuple, Optional, Sequence, Tuple

# Third-party
import numpy as np
from scipy.ndimage import uniform_filter

# GRPOL internal
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.polarimetry.algebra import (
    correlation_outer,
    hermitian_symmetrize,
    matrix_plus_equals,
    matrix_times_equals,
)
from grpol.polarimetry.converter import resolve_conversion, scattering_vector
from grpol.polarimetry.kinds import MatrixKind

logger = logging.getLogger(__name__)


class PixelWindow(NamedTuple):
    """Half-extents of the averaging window.

    Attributes
    ----------
    half_width : int
        Columns on each side of the centre pixel.
    half_height : int
        Rows on each side of the centre pixel.
    """

    half_width: int
    half_height: int

    @classmethod
    def from_size(cls, size: int) -> 'PixelWindow':
        """Square window from an odd side length (1 means no averaging)."""
        if not isinstance(size, (int, np.integer)) or isinstance(size, bool):
            raise ValidationError(
                f"window size must be an int, got {type(size).__name__}"
            )
        if size < 1 or size % 2 == 0:
            raise ValidationError(
                f"window size must be odd and >= 1, got {size}"
            )
        return cls(size // 2, size // 2)

    @property
    def size(self) -> Tuple[int, int]:
        """Full ``(rows, cols)`` extent of the unclamped window."""
        return (2 * self.half_height + 1, 2 * self.half_width + 1)

    def bounds(
        self, row: int, col: int, image_shape: Tuple[int, int]
    ) -> Tuple[int, int, int, int]:
        """Clamped inclusive ``(row_start, row_end, col_start, col_end)``."""
        nrows, ncols = image_shape
        return (
            max(row - self.half_height, 0),
            min(row + self.half_height, nrows - 1),
            max(col - self.half_width, 0),
            min(col + self.half_width, ncols - 1),
        )

    def count(self, row: int, col: int, image_shape: Tuple[int, int]) -> int:
        """Number of pixels in the clamped window centred at ``(row, col)``."""
        rs, re, cs, ce = self.bounds(row, col, image_shape)
        return (re - rs + 1) * (ce - cs + 1)


def clamped_window_counts(
    shape: Tuple[int, int],
    window: PixelWindow,
    origin: Tuple[int, int] = (0, 0),
    image_shape: Optional[Tuple[int, int]] = None,
) -> np.ndarray:
    """Per-pixel clamped window counts for a region of an image.

    Parameters
    ----------
    shape : Tuple[int, int]
        ``(rows, cols)`` of the region.
    window : PixelWindow
    origin : Tuple[int, int]
        Image coordinates ``(row, col)`` of the region's first pixel.
    image_shape : Tuple[int, int], optional
        Full image ``(rows, cols)``. Defaults to *shape*.

    Returns
    -------
    np.ndarray
        Float64 array of shape *shape*.
    """
    if image_shape is None:
        image_shape = shape
    rows = origin[0] + np.arange(shape[0])
    cols = origin[1] + np.arange(shape[1])
    row_count = (np.minimum(rows + window.half_height, image_shape[0] - 1)
                 - np.maximum(rows - window.half_height, 0) + 1)
    col_count = (np.minimum(cols + window.half_width, image_shape[1] - 1)
                 - np.maximum(cols - window.half_width, 0) + 1)
    return np.outer(row_count, col_count).astype(np.float64)


def _box_mean(values: np.ndarray, window: PixelWindow, counts: np.ndarray) -> np.ndarray:
    """Clamped box mean of a real 2-D array; non-finite samples add nothing."""
    values = np.where(np.isfinite(values), values, 0.0)
    size = window.size
    area = float(size[0] * size[1])
    sums = uniform_filter(values, size=size, mode='constant', cval=0.0) * area
    return sums / counts


def windowed_mean(
    matrix: np.ndarray,
    window: PixelWindow,
    origin: Tuple[int, int] = (0, 0),
    image_shape: Optional[Tuple[int, int]] = None,
) -> np.ndarray:
    """Clamped sliding-window mean of a Hermitian matrix stack.

    Real and imaginary parts of the upper triangle are averaged
    independently; the lower triangle is rebuilt by conjugation.

    Parameters
    ----------
    matrix : np.ndarray
        Complex array ``(rows, cols, N, N)``.
    window : PixelWindow
    origin, image_shape
        Placement of *matrix* inside the full image. See
        ``clamped_window_counts``.

    Returns
    -------
    np.ndarray
        Complex128 array with the same shape as *matrix*.
    """
    if window.half_width == 0 and window.half_height == 0:
        return hermitian_symmetrize(matrix)
    counts = clamped_window_counts(matrix.shape[:2], window, origin, image_shape)
    n = matrix.shape[-1]
    out = np.zeros(matrix.shape, dtype=np.complex128)
    for r in range(n):
        out[..., r, r] = _box_mean(
            np.ascontiguousarray(matrix[..., r, r].real), window, counts)
        for c in range(r + 1, n):
            out[..., r, c].real = _box_mean(
                np.ascontiguousarray(matrix[..., r, c].real), window, counts)
            out[..., r, c].imag = _box_mean(
                np.ascontiguousarray(matrix[..., r, c].imag), window, counts)
    return hermitian_symmetrize(out)


class MatrixEstimator:
    """Windowed estimator of a target matrix kind from a source band group.

    Parameters
    ----------
    source_kind : MatrixKind
        Layout of the input bands.
    target_kind : MatrixKind
        Matrix kind to estimate.
    window : PixelWindow
        Averaging window. ``PixelWindow(0, 0)`` disables averaging.

    Raises
    ------
    ConfigurationError
        If *target_kind* cannot be formed from *source_kind*.

    Examples
    --------
    >>> est = MatrixEstimator(MatrixKind.FULL, MatrixKind.T3,
    ...                       PixelWindow.from_size(5))
    >>> t3 = est.estimate(bands)          # (rows, cols, 3, 3) complex
    """

    def __init__(
        self,
        source_kind: MatrixKind,
        target_kind: MatrixKind,
        window: PixelWindow,
    ) -> None:
        self._plan = resolve_conversion(source_kind, target_kind)
        self._window = window
        logger.debug(
            "MatrixEstimator %s -> %s, window %s",
            source_kind.value, target_kind.value, window.size,
        )

    @property
    def source_kind(self) -> MatrixKind:
        return self._plan.source

    @property
    def target_kind(self) -> MatrixKind:
        return self._plan.target

    @property
    def window(self) -> PixelWindow:
        return self._window

    def pixel_matrices(self, channels: Sequence[np.ndarray]) -> np.ndarray:
        """Per-pixel target matrices without spatial averaging."""
        return self._plan.pixel_matrices(channels)

    def estimate(
        self,
        channels: Sequence[np.ndarray],
        origin: Tuple[int, int] = (0, 0),
        image_shape: Optional[Tuple[int, int]] = None,
    ) -> np.ndarray:
        """Windowed mean target matrix at every pixel of a region.

        Parameters
        ----------
        channels : Sequence[np.ndarray]
            Source bands in ``channel_names(source_kind)`` order, each
            ``(rows, cols)``.
        origin : Tuple[int, int]
            Image coordinates of the region's first pixel.
        image_shape : Tuple[int, int], optional
            Full image shape. Defaults to the region shape.

        Returns
        -------
        np.ndarray
            Complex128 array ``(rows, cols, N, N)``.
        """
        return windowed_mean(
            self.pixel_matrices(channels), self._window, origin, image_shape
        )

    def mean_matrix_at(
        self, channels: Sequence[np.ndarray], row: int, col: int
    ) -> np.ndarray:
        """Windowed mean target matrix at a single pixel.

        Parameters
        ----------
        channels : Sequence[np.ndarray]
            Full-image source bands.
        row, col : int
            Pixel coordinate.

        Returns
        -------
        np.ndarray
            Complex128 ``(N, N)`` Hermitian matrix.
        """
        image_shape = np.shape(channels[0])
        rs, re, cs, ce = self._window.bounds(row, col, image_shape)
        sub = [np.asarray(band)[rs:re + 1, cs:ce + 1] for band in channels]
        mats = self.pixel_matrices(sub)
        n = mats.shape[-1]
        acc = np.zeros((n, n), dtype=np.complex128)
        for m in mats.reshape(-1, n, n):
            matrix_plus_equals(acc, m)
        matrix_times_equals(acc, 1.0 / self._window.count(row, col, image_shape))
        return hermitian_symmetrize(acc)


def mean_correlation_c2(
    primary: Sequence[np.ndarray],
    secondary: Sequence[np.ndarray],
    source_kind: MatrixKind,
    window: PixelWindow,
    origin: Tuple[int, int] = (0, 0),
    image_shape: Optional[Tuple[int, int]] = None,
) -> np.ndarray:
    """Windowed mean 2x2 correlation matrix ``<k1 k2^H>`` of two acquisitions.

    Parameters
    ----------
    primary, secondary : Sequence[np.ndarray]
        Raw ``i``/``q`` bands of the two acquisitions.
    source_kind : MatrixKind
        Raw dual-pol or compact-pol kind shared by both acquisitions.
    window : PixelWindow

    Returns
    -------
    np.ndarray
        Complex128 ``(rows, cols, 2, 2)``, not Hermitian in general.

    Raises
    ------
    ConfigurationError
        If *source_kind* is not a raw dual-pol or compact-pol kind.
    """
    if not (source_kind.is_dual_pol or source_kind.is_compact_pol):
        raise ConfigurationError(
            "Correlation matrix requires raw dual-pol or compact-pol "
            f"sources, got {source_kind.value}"
        )
    k1 = scattering_vector(primary, source_kind)
    k2 = scattering_vector(secondary, source_kind)
    if k1.shape != k2.shape:
        raise ValidationError(
            f"Acquisition shapes differ: {k1.shape[:2]} vs {k2.shape[:2]}"
        )
    corr = correlation_outer(k1, k2)
    if window.half_width == 0 and window.half_height == 0:
        return corr
    counts = clamped_window_counts(corr.shape[:2], window, origin, image_shape)
    out = np.empty_like(corr)
    for r in range(2):
        for c in range(2):
            out[..., r, c].real = _box_mean(
                np.ascontiguousarray(corr[..., r, c].real), window, counts)
            out[..., r, c].imag = _box_mean(
                np.ascontiguousarray(corr[..., r, c].imag), window, counts)
    return out
