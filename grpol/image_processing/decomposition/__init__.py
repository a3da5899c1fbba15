# -*- coding: utf-8 -*-
"""
Polarimetric Decomposition Sub-module - Model-based and basis decompositions.

Every decomposition is a pure function of the window-averaged covariance
matrix of a pixel. Quad-pol decompositions consume C3; the Cloude-Pottier
classifier consumes the dual-pol C2.

Key Classes
-----------
- PolarimetricDecomposition: ABC for all decompositions and classifiers
- PowerDecomposition: ABC for decompositions written as dB powers
- PauliDecomposition: Pauli basis (double bounce / volume / surface)
- SinclairDecomposition: Lexicographic channel powers (VV / cross / HH)
- FreemanDurdenDecomposition: Three-component model
- YamaguchiDecomposition: Four-component model with helix
- CloudePottierClassifier: Dual-pol H/Alpha zone classification

When to Use What
----------------
- **Quad-pol data:** Pauli and Sinclair for quick colour composites;
  Freeman-Durden or Yamaguchi for physically interpretable powers.
  Yamaguchi adds a helix term and falls back to Freeman-Durden where
  its volume estimate is not positive.
- **Dual-pol or compact-pol data:** ``CloudePottierClassifier``.
  Pauli and Sinclair also accept linear dual-pol data, with zero power
  in the missing polarisation.

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

from grpol.image_processing.decomposition.base import (
    PolarimetricDecomposition,
    PowerDecomposition,
)
from grpol.image_processing.decomposition.pauli import PauliDecomposition
from grpol.image_processing.decomposition.sinclair import SinclairDecomposition
from grpol.image_processing.decomposition.freeman_durden import (
    FreemanDurdenDecomposition,
    freeman_durden_powers,
)
from grpol.image_processing.decomposition.yamaguchi import (
    YamaguchiDecomposition,
    yamaguchi_powers,
)
from grpol.image_processing.decomposition.cloude_pottier import (
    CloudePottierClassifier,
    HAlphaPlane,
    NO_DATA_ZONE,
    h_alpha_c2,
)
from grpol.image_processing.decomposition.factory import (
    DECOMPOSITIONS,
    create_decomposition,
    parse_method,
)

__all__ = [
    'PolarimetricDecomposition',
    'PowerDecomposition',
    'PauliDecomposition',
    'SinclairDecomposition',
    'FreemanDurdenDecomposition',
    'freeman_durden_powers',
    'YamaguchiDecomposition',
    'yamaguchi_powers',
    'CloudePottierClassifier',
    'HAlphaPlane',
    'NO_DATA_ZONE',
    'h_alpha_c2',
    'DECOMPOSITIONS',
    'create_decomposition',
    'parse_method',
]
