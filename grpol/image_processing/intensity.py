# -*- coding: utf-8 -*-
"""
Intensity Transforms - Power to decibel conversion and span normalisation.

All decibel outputs use the same floor policy: the linear power is clamped
below at ``EPS`` before ``10 * log10``, so zero or negative power maps to
``10 * log10(EPS)`` (-100 dB) rather than ``-inf``.

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
2026-03-04
"""

# Standard library
from typing import Annotated, Any

# Third-party
import numpy as np

# GRPOL internal
from grpol.image_processing.base import ImageTransform
from grpol.image_processing.params import Desc, Range
from grpol.image_processing.versioning import processor_version, processor_tags
from grpol.vocabulary import ProcessorCategory

#: Linear power floor applied before every dB conversion.
EPS = 1e-10


def power_to_db(power: np.ndarray, eps: float = EPS) -> np.ndarray:
    """``10 * log10(max(power, eps))`` as float64."""
    return 10.0 * np.log10(np.maximum(np.asarray(power, dtype=np.float64), eps))


def normalize_to_span(
    power: np.ndarray, span_min: float, span_max: float
) -> np.ndarray:
    """Linearly map *power* from ``[span_min, span_max]`` into ``[0, 1]``.

    Values outside the span range are clipped. A degenerate range
    (``span_max <= span_min``) maps everything to 0.
    """
    power = np.asarray(power, dtype=np.float64)
    extent = span_max - span_min
    if not extent > 0.0:
        return np.zeros_like(power)
    return np.clip((power - span_min) / extent, 0.0, 1.0)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MATH)
class ToDecibels(ImageTransform):
    """Convert linear power to decibels with an epsilon floor.

    Parameters
    ----------
    eps : float
        Linear floor applied before the logarithm. Default ``1e-10``.

    Examples
    --------
    >>> to_db = ToDecibels()
    >>> to_db.apply(np.array([0.0, 1.0, 100.0]))
    array([-100.,    0.,   20.])
    """

    eps: Annotated[float, Range(min=1e-30, max=1.0), Desc('Linear power floor')] = EPS

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply dB conversion.

        Parameters
        ----------
        source : np.ndarray
            Real-valued linear power of any shape.

        Returns
        -------
        np.ndarray
            Float64 dB array of the same shape.
        """
        params = self._resolve_params(kwargs)
        return power_to_db(source, params['eps'])

    def __repr__(self) -> str:
        return f"ToDecibels(eps={self.eps!r})"
