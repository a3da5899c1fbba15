# -*- coding: utf-8 -*-
"""
Matrix Format Converter - Channel layouts and basis changes between kinds.

Maps between the real-valued band layout of each ``MatrixKind`` and the
complex per-pixel matrix stack used by the estimator and decompositions,
and resolves which source-to-target conversions are legal.

Band layout of a matrix kind is row-major over the upper triangle, with
the diagonal stored as one real band and each off-diagonal element as a
``_real``/``_imag`` pair::

    C3 -> C11, C12_real, C12_imag, C13_real, C13_imag,
          C22, C23_real, C23_imag, C33

Raw kinds store interleaved in-phase and quadrature bands per channel
(``i_HH, q_HH, i_HV, q_HV, ...``).

Every legal conversion is a single linear map ``W``: raw sources form
``k' = W k`` and then ``k' k'^H``; matrix sources form ``W M W^H``.
Requests that would need information the source does not carry (C2 or
C3/T3 to a 4x4 target, dual-pol to quad-pol) are refused.

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
from typing import Dict, NamedTuple, Sequence, Tuple

# Third-party
import numpy as np

# GRPOL internal
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.polarimetry.algebra import (
    covariance_outer,
    hermitian_symmetrize,
    pairs_to_complex,
    similarity,
)
from grpol.polarimetry.kinds import MatrixBasis, MatrixKind

_SQRT2 = np.sqrt(2.0)

# Lexicographic 3-vector to Pauli 3-vector.
_U3 = np.array([
    [1.0, 0.0, 1.0],
    [1.0, 0.0, -1.0],
    [0.0, _SQRT2, 0.0],
], dtype=np.complex128) / _SQRT2

# Lexicographic 4-vector to Pauli 4-vector.
_U4 = np.array([
    [1.0, 0.0, 0.0, 1.0],
    [1.0, 0.0, 0.0, -1.0],
    [0.0, 1.0, 1.0, 0.0],
    [0.0, 1.0j, -1.0j, 0.0],
], dtype=np.complex128) / _SQRT2

# Reciprocal reduction of the lexicographic 4-vector (HV and VH merged).
_A43 = np.array([
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0 / _SQRT2, 1.0 / _SQRT2, 0.0],
    [0.0, 0.0, 0.0, 1.0],
], dtype=np.complex128)

# Pauli 4-vector to Pauli 3-vector.
_P43 = np.eye(3, 4, dtype=np.complex128)

_RAW_CHANNELS: Dict[MatrixKind, Tuple[str, ...]] = {
    MatrixKind.FULL: ('HH', 'HV', 'VH', 'VV'),
    MatrixKind.DUAL_HH_HV: ('HH', 'HV'),
    MatrixKind.DUAL_VH_VV: ('VH', 'VV'),
    MatrixKind.DUAL_HH_VV: ('HH', 'VV'),
    MatrixKind.LCHCP: ('LH', 'LV'),
    MatrixKind.RCHCP: ('RH', 'RV'),
}

# (source, target) -> W.  Raw sources map scattering vectors; matrix
# sources map matrices by similarity.
_TRANSFORMS: Dict[Tuple[MatrixKind, MatrixKind], np.ndarray] = {
    (MatrixKind.FULL, MatrixKind.C4): np.eye(4, dtype=np.complex128),
    (MatrixKind.FULL, MatrixKind.T4): _U4,
    (MatrixKind.FULL, MatrixKind.C3): _A43,
    (MatrixKind.FULL, MatrixKind.T3): _U3 @ _A43,
    (MatrixKind.C4, MatrixKind.T4): _U4,
    (MatrixKind.C4, MatrixKind.C3): _A43,
    (MatrixKind.C4, MatrixKind.T3): _U3 @ _A43,
    (MatrixKind.T4, MatrixKind.C4): _U4.conj().T,
    (MatrixKind.T4, MatrixKind.T3): _P43,
    (MatrixKind.T4, MatrixKind.C3): _U3.conj().T @ _P43,
    (MatrixKind.C3, MatrixKind.T3): _U3,
    (MatrixKind.T3, MatrixKind.C3): _U3.conj().T,
}

# Dual-pol C2 placed into the lexicographic C3 slots.
_DUAL_EMBEDDINGS: Dict[MatrixKind, np.ndarray] = {
    MatrixKind.DUAL_HH_HV: np.array(
        [[1.0, 0.0], [0.0, _SQRT2], [0.0, 0.0]], dtype=np.complex128),
    MatrixKind.DUAL_VH_VV: np.array(
        [[0.0, 0.0], [_SQRT2, 0.0], [0.0, 1.0]], dtype=np.complex128),
    MatrixKind.DUAL_HH_VV: np.array(
        [[1.0, 0.0], [0.0, 0.0], [0.0, 1.0]], dtype=np.complex128),
}


class MatrixElement(NamedTuple):
    """Position of a real band inside a Hermitian matrix.

    Attributes
    ----------
    row : int
        Zero-based row.
    col : int
        Zero-based column (``col >= row``).
    imaginary : bool
        Whether the band holds the imaginary part.
    """

    row: int
    col: int
    imaginary: bool


# ---------------------------------------------------------------------------
# Band layout
# ---------------------------------------------------------------------------

def channel_names(kind: MatrixKind) -> Tuple[str, ...]:
    """Ordered band names for *kind*.

    Parameters
    ----------
    kind : MatrixKind

    Returns
    -------
    Tuple[str, ...]
        ``kind.n_channels`` names.
    """
    if kind.is_raw:
        names = []
        for pol in _RAW_CHANNELS[kind]:
            names.extend((f'i_{pol}', f'q_{pol}'))
        return tuple(names)

    prefix = 'T' if kind.basis is MatrixBasis.COHERENCY else 'C'
    n = kind.dimension
    names = []
    for r in range(1, n + 1):
        for c in range(r, n + 1):
            if r == c:
                names.append(f'{prefix}{r}{c}')
            else:
                names.append(f'{prefix}{r}{c}_real')
                names.append(f'{prefix}{r}{c}_imag')
    return tuple(names)


def channel_element(name: str) -> MatrixElement:
    """Decode a matrix band name such as ``'T12_imag'`` or ``'33'``.

    Raises
    ------
    ValidationError
        If *name* does not address an upper-triangle element.
    """
    stem = name.lstrip('CT')
    suffix = ''
    if '_' in stem:
        stem, suffix = stem.split('_', 1)
    if len(stem) != 2 or not stem.isdigit() or suffix not in ('', 'real', 'imag'):
        raise ValidationError(f"Not a matrix element band name: {name!r}")
    row, col = int(stem[0]) - 1, int(stem[1]) - 1
    if row < 0 or col < row or col > 3:
        raise ValidationError(f"Not an upper-triangle element: {name!r}")
    if row == col and suffix == 'imag':
        raise ValidationError(f"Diagonal elements are real: {name!r}")
    if row != col and suffix == '':
        raise ValidationError(
            f"Off-diagonal band {name!r} needs a _real or _imag suffix"
        )
    return MatrixElement(row, col, suffix == 'imag')


def element_map(kind: MatrixKind) -> Dict[str, MatrixElement]:
    """Band name to ``MatrixElement`` for every band of a matrix kind."""
    if kind.is_raw:
        raise ValidationError(f"{kind.value} is not a matrix kind")
    return {name: channel_element(name) for name in channel_names(kind)}


def _check_channels(channels: Sequence[np.ndarray], kind: MatrixKind) -> None:
    if len(channels) != kind.n_channels:
        raise ValidationError(
            f"{kind.value} expects {kind.n_channels} bands, got {len(channels)}"
        )
    shape = np.shape(channels[0])
    for idx, band in enumerate(channels):
        if np.shape(band) != shape:
            raise ValidationError(
                f"Band {idx} has shape {np.shape(band)}, expected {shape}"
            )


def read_matrix(channels: Sequence[np.ndarray], kind: MatrixKind) -> np.ndarray:
    """Assemble pre-formed matrix bands into a Hermitian stack.

    Parameters
    ----------
    channels : Sequence[np.ndarray]
        Real bands ordered as ``channel_names(kind)``, each ``(rows, cols)``.
    kind : MatrixKind
        A matrix kind.

    Returns
    -------
    np.ndarray
        Complex128 array of shape ``(rows, cols, N, N)``.
    """
    _check_channels(channels, kind)
    n = kind.dimension
    m = np.zeros(np.shape(channels[0]) + (n, n), dtype=np.complex128)
    for band, elem in zip(channels, element_map(kind).values()):
        if elem.imaginary:
            m[..., elem.row, elem.col] += 1j * np.asarray(band, dtype=np.float64)
        else:
            m[..., elem.row, elem.col] += np.asarray(band, dtype=np.float64)
    return hermitian_symmetrize(m)


def write_channels(matrix: np.ndarray, kind: MatrixKind) -> Dict[str, np.ndarray]:
    """Split a Hermitian stack into the named real bands of *kind*."""
    out: Dict[str, np.ndarray] = {}
    for name, elem in element_map(kind).items():
        value = matrix[..., elem.row, elem.col]
        out[name] = np.imag(value).copy() if elem.imaginary else np.real(value).copy()
    return out


def scattering_vector(channels: Sequence[np.ndarray], kind: MatrixKind) -> np.ndarray:
    """Combine raw ``i``/``q`` bands into complex scattering vectors.

    Returns
    -------
    np.ndarray
        Complex128 array of shape ``(rows, cols, D)`` in channel order.
    """
    if not kind.is_raw:
        raise ValidationError(f"{kind.value} does not carry scattering channels")
    _check_channels(channels, kind)
    pairs = [
        pairs_to_complex(np.asarray(channels[2 * p], dtype=np.float64),
                         np.asarray(channels[2 * p + 1], dtype=np.float64))
        for p in range(kind.dimension)
    ]
    return np.stack(pairs, axis=-1)


# ---------------------------------------------------------------------------
# Conversion planning
# ---------------------------------------------------------------------------

class ConversionPlan(NamedTuple):
    """A resolved source-to-target conversion.

    Attributes
    ----------
    source : MatrixKind
    target : MatrixKind
    transform : np.ndarray
        Linear map of shape ``(target_dim, source_dim)``.
    """

    source: MatrixKind
    target: MatrixKind
    transform: np.ndarray

    @property
    def is_identity(self) -> bool:
        return self.source is self.target or (
            self.source.is_raw and self.target is MatrixKind.C2
        )

    def pixel_matrices(self, channels: Sequence[np.ndarray]) -> np.ndarray:
        """Per-pixel target matrices, before any spatial averaging."""
        if self.source.is_raw:
            k = scattering_vector(channels, self.source)
            if not self.is_identity:
                k = k @ self.transform.T
            return covariance_outer(k)
        m = read_matrix(channels, self.source)
        if self.is_identity:
            return m
        return similarity(self.transform, m)


def resolve_conversion(source: MatrixKind, target: MatrixKind) -> ConversionPlan:
    """Decide how *source* bands become *target* matrices.

    Parameters
    ----------
    source : MatrixKind
        Kind of the input band group.
    target : MatrixKind
        Requested matrix kind.

    Returns
    -------
    ConversionPlan

    Raises
    ------
    ConfigurationError
        If the target is not a matrix kind or the conversion would
        require information that the source does not carry.
    """
    if target.is_raw:
        raise ConfigurationError(
            f"Target must be one of C2, C3, C4, T3, T4, got {target.value}"
        )
    if target is MatrixKind.C2:
        if source.is_raw and source is not MatrixKind.FULL:
            return ConversionPlan(source, target, np.eye(2, dtype=np.complex128))
        if source is MatrixKind.C2:
            return ConversionPlan(source, target, np.eye(2, dtype=np.complex128))
        raise ConfigurationError(
            "Dual-pol product is expected for C2. "
            f"Select a dual-pol band subset of the {source.value} product first"
        )
    if source is target:
        return ConversionPlan(
            source, target, np.eye(target.dimension, dtype=np.complex128)
        )
    if source in (MatrixKind.C3, MatrixKind.T3) and target.dimension == 4:
        raise ConfigurationError(
            f"Cannot convert source product from {source.value} format "
            f"to {target.value} format"
        )
    transform = _TRANSFORMS.get((source, target))
    if transform is None:
        raise ConfigurationError(
            f"Full-pol polarimetric product is expected for {target.value}, "
            f"got {source.value}"
        )
    return ConversionPlan(source, target, transform)


def convert(matrix: np.ndarray, source: MatrixKind, target: MatrixKind) -> np.ndarray:
    """Change basis or dimension of a Hermitian matrix stack.

    Parameters
    ----------
    matrix : np.ndarray
        Complex array ``(..., N, N)`` in the *source* representation.
    source, target : MatrixKind
        Matrix kinds.

    Returns
    -------
    np.ndarray
        Complex array ``(..., P, P)`` in the *target* representation.
    """
    if source.is_raw:
        raise ValidationError(
            f"{source.value} carries scattering channels, not matrices"
        )
    plan = resolve_conversion(source, target)
    if plan.is_identity:
        return hermitian_symmetrize(matrix)
    return similarity(plan.transform, matrix)


def embed_dual_pol(c2: np.ndarray, kind: MatrixKind) -> np.ndarray:
    """Place a dual-pol covariance matrix into the lexicographic C3 slots.

    The missing polarisation contributes zero power, so 3x3 power
    decompositions reduce to their dual-pol counterparts. A pre-formed
    ``C2`` is taken to be co-pol/cross-pol (HH/HV).

    Parameters
    ----------
    c2 : np.ndarray
        Complex array ``(..., 2, 2)``.
    kind : MatrixKind
        Dual-pol kind the C2 was formed from, or ``C2``.

    Returns
    -------
    np.ndarray
        Complex array ``(..., 3, 3)``.

    Raises
    ------
    ConfigurationError
        For compact-pol kinds, which have no linear-basis embedding.
    """
    if kind is MatrixKind.C2:
        kind = MatrixKind.DUAL_HH_HV
    w = _DUAL_EMBEDDINGS.get(kind)
    if w is None:
        raise ConfigurationError(
            f"{kind.value} has no linear-basis C3 embedding"
        )
    return similarity(w, c2)
