# -*- coding: utf-8 -*-
"""
Matrix Kinds - Polarimetric source and target representations.

Enumerates every polarimetric layout the engine reads or writes: the raw
scattering channels of quad-pol, dual-pol and compact-pol products, and
the pre-formed covariance (C) and coherency (T) matrices. Each kind knows
its matrix side, its basis, and how many real-valued source channels it
occupies.

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

# Standard library
from enum import Enum
from typing import Union

# GRPOL internal
from grpol.exceptions import ConfigurationError


class MatrixBasis(Enum):
    """Polarimetric basis of a representation."""

    SCATTERING = "scattering"
    COVARIANCE = "covariance"
    COHERENCY = "coherency"


class MatrixKind(Enum):
    """Polarimetric representation of a band group.

    Raw kinds (``FULL``, dual-pol, compact-pol) carry complex scattering
    channels as interleaved ``i``/``q`` bands. Matrix kinds carry the
    upper triangle of a Hermitian matrix as real bands.
    """

    C2 = "C2"
    C3 = "C3"
    C4 = "C4"
    T3 = "T3"
    T4 = "T4"
    FULL = "FULL"
    DUAL_HH_HV = "DUAL_HH_HV"
    DUAL_VH_VV = "DUAL_VH_VV"
    DUAL_HH_VV = "DUAL_HH_VV"
    LCHCP = "LCHCP"
    RCHCP = "RCHCP"

    @property
    def dimension(self) -> int:
        """Side of the matrix or length of the scattering vector."""
        if self in (MatrixKind.C4, MatrixKind.T4, MatrixKind.FULL):
            return 4
        if self in (MatrixKind.C3, MatrixKind.T3):
            return 3
        return 2

    @property
    def basis(self) -> MatrixBasis:
        if self.is_raw:
            return MatrixBasis.SCATTERING
        if self in (MatrixKind.T3, MatrixKind.T4):
            return MatrixBasis.COHERENCY
        return MatrixBasis.COVARIANCE

    @property
    def is_raw(self) -> bool:
        """Whether the kind carries complex scattering channels."""
        return self in _RAW_KINDS

    @property
    def is_dual_pol(self) -> bool:
        return self in (
            MatrixKind.DUAL_HH_HV, MatrixKind.DUAL_VH_VV, MatrixKind.DUAL_HH_VV,
        )

    @property
    def is_compact_pol(self) -> bool:
        return self in (MatrixKind.LCHCP, MatrixKind.RCHCP)

    @property
    def is_matrix(self) -> bool:
        """Whether the kind is a pre-formed Hermitian matrix."""
        return not self.is_raw

    @property
    def n_channels(self) -> int:
        """Number of real-valued source bands.

        Raw kinds store two bands (``i``, ``q``) per complex channel.
        Matrix kinds store ``N`` diagonal bands plus a real and an
        imaginary band for each upper off-diagonal element, i.e. ``N**2``.
        """
        if self.is_raw:
            return 2 * self.dimension
        return self.dimension ** 2

    @classmethod
    def parse(cls, value: Union[str, 'MatrixKind']) -> 'MatrixKind':
        """Resolve a kind from its name, case-insensitively.

        Parameters
        ----------
        value : str or MatrixKind
            Kind name such as ``'T3'`` or ``'dual_hh_hv'``.

        Returns
        -------
        MatrixKind

        Raises
        ------
        ConfigurationError
            If *value* does not name a polarimetric representation.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            for kind in cls:
                if kind.value == key:
                    return kind
        raise ConfigurationError(
            f"Input should be a polarimetric product, got {value!r}. "
            f"Expected one of {[k.value for k in cls]}"
        )


_RAW_KINDS = frozenset({
    MatrixKind.FULL,
    MatrixKind.DUAL_HH_HV,
    MatrixKind.DUAL_VH_VV,
    MatrixKind.DUAL_HH_VV,
    MatrixKind.LCHCP,
    MatrixKind.RCHCP,
})
