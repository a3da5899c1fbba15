# -*- coding: utf-8 -*-
"""
Decomposition Factory - Closed dispatch from method name to processor.

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
2026-02-20

Modified
--------
2026-03-06
"""

# Standard library
from typing import Any, Dict, Type, Union

# GRPOL internal
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.image_processing.decomposition.base import PolarimetricDecomposition
from grpol.image_processing.decomposition.cloude_pottier import CloudePottierClassifier
from grpol.image_processing.decomposition.freeman_durden import FreemanDurdenDecomposition
from grpol.image_processing.decomposition.pauli import PauliDecomposition
from grpol.image_processing.decomposition.sinclair import SinclairDecomposition
from grpol.image_processing.decomposition.yamaguchi import YamaguchiDecomposition
from grpol.vocabulary import DecompositionMethod

DECOMPOSITIONS: Dict[DecompositionMethod, Type[PolarimetricDecomposition]] = {
    DecompositionMethod.PAULI: PauliDecomposition,
    DecompositionMethod.SINCLAIR: SinclairDecomposition,
    DecompositionMethod.FREEMAN_DURDEN: FreemanDurdenDecomposition,
    DecompositionMethod.YAMAGUCHI: YamaguchiDecomposition,
    DecompositionMethod.CLOUDE_POTTIER: CloudePottierClassifier,
}


def parse_method(method: Union[str, DecompositionMethod]) -> DecompositionMethod:
    """Resolve a decomposition method from its configuration name.

    Raises
    ------
    ConfigurationError
        If *method* is not a known decomposition.
    """
    if isinstance(method, DecompositionMethod):
        return method
    try:
        return DecompositionMethod(str(method).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Unknown decomposition {method!r}. Expected one of "
            f"{[m.value for m in DecompositionMethod]}"
        ) from None


def create_decomposition(
    method: Union[str, DecompositionMethod], **params: Any
) -> PolarimetricDecomposition:
    """Instantiate the decomposition for *method* with its parameters.

    Parameters
    ----------
    method : str or DecompositionMethod
        For example ``'yamaguchi'``.
    **params
        Tunable parameters of the chosen processor (``normalize``,
        ``plane``, ...).

    Returns
    -------
    PolarimetricDecomposition

    Raises
    ------
    ConfigurationError
        If *method* is unknown or a parameter does not apply to it.
    """
    cls = DECOMPOSITIONS[parse_method(method)]
    try:
        return cls(**params)
    except (TypeError, ValidationError) as exc:
        raise ConfigurationError(f"{cls.__name__}: {exc}") from exc
