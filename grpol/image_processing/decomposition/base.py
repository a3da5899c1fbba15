# -*- coding: utf-8 -*-
"""
Polarimetric Decomposition Base Classes - Abstract interfaces for decompositions.

Defines ``PolarimetricDecomposition``, the abstract base for every
decomposition and classifier, and ``PowerDecomposition`` for the
decompositions whose outputs are scattering powers written in decibels
(Pauli, Sinclair, Freeman-Durden, Yamaguchi).

A decomposition is a pure per-pixel function of the window-averaged
matrix. It declares which matrix kind it consumes (``input_kind``), which
source kinds it can be fed from (``estimation_kind``), and how the
averaged matrix is adapted before decomposition (``prepare``). Raw
physical powers are returned by ``decompose``; conversion to decibels,
with optional normalisation by the image-wide span range, is a separate
explicit step (``to_bands``).

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
2026-01-30

Modified
--------
2026-03-06
"""

# Standard library
from abc import abstractmethod
from typing import Annotated, Dict, Optional, Tuple, TYPE_CHECKING

# Third-party
import numpy as np

# GRPOL internal
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.image_processing.base import ImageProcessor
from grpol.image_processing.intensity import normalize_to_span, power_to_db
from grpol.image_processing.params import Desc
from grpol.image_processing.versioning import globalprocessor
from grpol.polarimetry.algebra import span
from grpol.polarimetry.converter import embed_dual_pol
from grpol.polarimetry.kinds import MatrixKind

if TYPE_CHECKING:
    from grpol.runtime.span import SpanStatistic

_QUAD_POL_SOURCES = frozenset({
    MatrixKind.FULL, MatrixKind.C3, MatrixKind.T3, MatrixKind.C4, MatrixKind.T4,
})

_DUAL_POL_SOURCES = frozenset({
    MatrixKind.C2, MatrixKind.DUAL_HH_HV, MatrixKind.DUAL_VH_VV,
    MatrixKind.DUAL_HH_VV, MatrixKind.LCHCP, MatrixKind.RCHCP,
})


class PolarimetricDecomposition(ImageProcessor):
    """
    Abstract base class for polarimetric decompositions and classifiers.

    Subclasses implement ``decompose``, which maps a stack of averaged
    matrices ``(..., N, N)`` to named real-valued components, and
    ``to_bands``, which turns those components into the named output
    bands written by the tile runtime.

    Class attributes
    ----------------
    input_kind : MatrixKind
        Matrix kind consumed by ``decompose``.
    accepts_dual_pol : bool
        Whether dual-pol sources may be embedded into ``input_kind``.
    """

    input_kind: MatrixKind = MatrixKind.C3
    accepts_dual_pol: bool = False

    #: Value written to every output band where the source is no-data.
    no_data_value: float = 0.0

    # ------------------------------------------------------------------
    # Source negotiation
    # ------------------------------------------------------------------

    def estimation_kind(self, source_kind: MatrixKind) -> MatrixKind:
        """Matrix kind the estimator must produce from *source_kind*.

        Raises
        ------
        ConfigurationError
            If this decomposition cannot be computed from *source_kind*.
        """
        if self.input_kind is MatrixKind.C2:
            if source_kind in _DUAL_POL_SOURCES:
                return MatrixKind.C2
            raise ConfigurationError(
                f"{type(self).__name__} requires a dual-pol or compact-pol "
                f"product, got {source_kind.value}"
            )
        if source_kind in _QUAD_POL_SOURCES:
            return self.input_kind
        if self.accepts_dual_pol and (
            source_kind.is_dual_pol or source_kind is MatrixKind.C2
        ):
            return MatrixKind.C2
        raise ConfigurationError(
            f"{type(self).__name__} requires a full-pol polarimetric "
            f"product, got {source_kind.value}"
        )

    def prepare(self, matrix: np.ndarray, source_kind: MatrixKind) -> np.ndarray:
        """Adapt an averaged matrix of ``estimation_kind`` to ``input_kind``."""
        if matrix.shape[-1] == 2 and self.input_kind is not MatrixKind.C2:
            return embed_dual_pol(matrix, source_kind)
        return matrix

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def component_names(self) -> Tuple[str, ...]:
        """Ordered keys returned by ``decompose``."""
        ...

    @property
    @abstractmethod
    def band_names(self) -> Tuple[str, ...]:
        """Ordered names of the output bands produced by ``to_bands``."""
        ...

    @abstractmethod
    def decompose(self, matrix: np.ndarray) -> Dict[str, np.ndarray]:
        """
        Decompose averaged matrices into named real-valued components.

        Parameters
        ----------
        matrix : np.ndarray
            Complex Hermitian stack ``(..., N, N)`` of ``input_kind``.

        Returns
        -------
        Dict[str, np.ndarray]
            Arrays shaped like ``matrix.shape[:-2]``, keyed by
            ``component_names``.
        """
        ...

    @abstractmethod
    def to_bands(
        self,
        components: Dict[str, np.ndarray],
        span_statistic: Optional['SpanStatistic'] = None,
    ) -> Dict[str, np.ndarray]:
        """Map components to output bands keyed by ``band_names``."""
        ...

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_matrix(self, matrix: np.ndarray) -> None:
        if not isinstance(matrix, np.ndarray):
            raise ValidationError(
                f"matrix must be a numpy ndarray, got {type(matrix).__name__}"
            )
        n = self.input_kind.dimension
        if matrix.ndim < 2 or matrix.shape[-2:] != (n, n):
            raise ValidationError(
                f"{type(self).__name__} expects (..., {n}, {n}) matrices, "
                f"got shape {matrix.shape}"
            )


class PowerDecomposition(PolarimetricDecomposition):
    """
    Base class for decompositions whose bands are powers in decibels.

    Every component is converted with ``10 * log10(max(v, EPS))``. With
    ``normalize=True`` the component is first mapped linearly into
    ``[0, 1]`` using the image-wide span range, which requires a global
    pass over the image before any tile is written.

    Parameters
    ----------
    normalize : bool
        Scale powers by the image-wide span range before conversion.
        Default ``False``.
    """

    normalize: Annotated[bool, Desc('Normalise by image-wide span range')] = False

    @property
    def has_global_pass(self) -> bool:
        return type(self).__has_global_pass__ and self.normalize

    @globalprocessor
    def span_extent(
        self, matrix: np.ndarray, valid: Optional[np.ndarray] = None
    ) -> Optional[Tuple[float, float]]:
        """Minimum and maximum total power over one tile.

        Parameters
        ----------
        matrix : np.ndarray
            Prepared averaged matrices ``(rows, cols, N, N)``.
        valid : np.ndarray, optional
            Boolean mask of pixels that are not no-data.

        Returns
        -------
        Tuple[float, float] or None
            ``None`` when the tile has no finite valid pixel.
        """
        total = span(matrix)
        mask = np.isfinite(total)
        if valid is not None:
            mask &= valid
        if not np.any(mask):
            return None
        return float(total[mask].min()), float(total[mask].max())

    def to_db(
        self,
        components: Dict[str, np.ndarray],
        span_statistic: Optional['SpanStatistic'] = None,
    ) -> Dict[str, np.ndarray]:
        """Convert raw powers to decibels, keyed by component name.

        Raises
        ------
        ValidationError
            If ``normalize`` is set and no span statistic is supplied.
        """
        if self.normalize and span_statistic is None:
            raise ValidationError(
                f"{type(self).__name__}(normalize=True) needs the image-wide "
                f"span statistic"
            )
        out = {}
        for name, power in components.items():
            if self.normalize:
                power = normalize_to_span(
                    power, span_statistic.min, span_statistic.max
                )
            out[name] = power_to_db(power)
        return out

    def to_bands(
        self,
        components: Dict[str, np.ndarray],
        span_statistic: Optional['SpanStatistic'] = None,
    ) -> Dict[str, np.ndarray]:
        db = self.to_db(components, span_statistic)
        return {
            band: db[name]
            for band, name in zip(self.band_names, self.component_names)
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(normalize={self.normalize!r})"


def safe_ratio(numerator: np.ndarray, denominator: np.ndarray) -> np.ndarray:
    """Element-wise ``numerator / denominator`` with 0 where the denominator is 0."""
    numerator = np.asarray(numerator, dtype=np.float64)
    denominator = np.asarray(denominator, dtype=np.float64)
    nonzero = denominator != 0.0
    safe = np.where(nonzero, denominator, 1.0)
    return np.where(nonzero, numerator / safe, 0.0)


def real_diagonal(matrix: np.ndarray, index: int) -> np.ndarray:
    """Real part of a diagonal element across the stack."""
    return np.real(matrix[..., index, index])
