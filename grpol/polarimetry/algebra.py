# -*- coding: utf-8 -*-
"""
Matrix Algebra Kernel - Small complex Hermitian matrix primitives.

All functions operate on stacks of matrices shaped ``(..., N, N)`` or
stacks of vectors shaped ``(..., N)`` with ``N`` in ``{2, 3, 4}``, so a
whole raster tile is processed in one vectorised call. Hermitian results
are constructed from their upper triangle only: the lower triangle is
the conjugate of the upper one and diagonal imaginary parts are exactly
zero, independent of floating-point rounding.

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
2026-03-02
"""

# Third-party
import numpy as np


def pairs_to_complex(i: np.ndarray, q: np.ndarray) -> np.ndarray:
    """Combine in-phase and quadrature bands into a complex128 array."""
    out = np.empty(np.broadcast(i, q).shape, dtype=np.complex128)
    out.real = i
    out.imag = q
    return out


def hermitian_symmetrize(m: np.ndarray) -> np.ndarray:
    """Rebuild *m* as an exactly Hermitian matrix from its upper triangle.

    Parameters
    ----------
    m : np.ndarray
        Complex array of shape ``(..., N, N)``. Only the diagonal real
        parts and the strict upper triangle are read.

    Returns
    -------
    np.ndarray
        New complex128 array of the same shape whose lower triangle is
        the conjugate of the upper triangle and whose diagonal is real.
    """
    m = np.asarray(m, dtype=np.complex128)
    n = m.shape[-1]
    out = np.empty_like(m)
    for r in range(n):
        out[..., r, r] = m[..., r, r].real
        for c in range(r + 1, n):
            out[..., r, c] = m[..., r, c]
            out[..., c, r] = np.conj(m[..., r, c])
    return out


def covariance_outer(k: np.ndarray) -> np.ndarray:
    """Hermitian outer product ``k k^H`` of scattering vectors.

    Parameters
    ----------
    k : np.ndarray
        Complex array of shape ``(..., N)``.

    Returns
    -------
    np.ndarray
        Complex128 array of shape ``(..., N, N)``.
    """
    k = np.asarray(k, dtype=np.complex128)
    n = k.shape[-1]
    out = np.empty(k.shape + (n,), dtype=np.complex128)
    for r in range(n):
        out[..., r, r] = k[..., r].real ** 2 + k[..., r].imag ** 2
        for c in range(r + 1, n):
            val = k[..., r] * np.conj(k[..., c])
            out[..., r, c] = val
            out[..., c, r] = np.conj(val)
    return out


def correlation_outer(k1: np.ndarray, k2: np.ndarray) -> np.ndarray:
    """Cross-correlation outer product ``k1 k2^H`` of two acquisitions.

    The result is generally not Hermitian, so every element is computed.
    """
    k1 = np.asarray(k1, dtype=np.complex128)
    k2 = np.asarray(k2, dtype=np.complex128)
    return k1[..., :, None] * np.conj(k2[..., None, :])


def similarity(w: np.ndarray, m: np.ndarray) -> np.ndarray:
    """Apply the change of basis ``W M W^H``.

    Parameters
    ----------
    w : np.ndarray
        Complex transform of shape ``(P, N)``.
    m : np.ndarray
        Hermitian stack of shape ``(..., N, N)``.

    Returns
    -------
    np.ndarray
        Hermitian stack of shape ``(..., P, P)``.
    """
    w = np.asarray(w, dtype=np.complex128)
    out = np.matmul(np.matmul(w, m), w.conj().T)
    return hermitian_symmetrize(out)


def span(m: np.ndarray) -> np.ndarray:
    """Total power: the real trace of each matrix in the stack."""
    return np.real(np.trace(m, axis1=-2, axis2=-1))


def matrix_plus_equals(acc: np.ndarray, m: np.ndarray) -> np.ndarray:
    """Accumulate *m* into *acc* in place and return *acc*."""
    np.add(acc, m, out=acc)
    return acc


def matrix_times_equals(m: np.ndarray, scalar: float) -> np.ndarray:
    """Scale *m* in place by *scalar* and return *m*."""
    np.multiply(m, scalar, out=m)
    return m
