# -*- coding: utf-8 -*-
"""
Processing Configuration - Validated run options and YAML loading.

A run is described by a ``ProcessingConfig``: which algorithm to apply,
the averaging window, output scaling, tiling and an optional
``CalibrationConfig``. Every field is validated when the config is built,
so a bad name or value fails before any tile is fetched.

Example ``config.yaml``::

    algorithm: freeman-durden
    window_size: 5
    normalize: true
    tile_size: 256
    workers: 4

    # or, for calibration
    algorithm: calibration
    calibration:
      mode: sigma0
      incidence_angle_source: dem
      output_db: true

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
2026-02-27

Modified
--------
2026-03-06
"""

# Standard library
import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar, Union

# Third-party
import yaml

# GRPOL internal
from grpol.exceptions import ConfigurationError
from grpol.polarimetry.kinds import MatrixKind
from grpol.vocabulary import (
    CalibrationMode,
    DecompositionMethod,
    IncidenceAngleSource,
)

logger = logging.getLogger(__name__)

#: Algorithms that write matrices or calibrated samples instead of
#: decomposition bands.
MATRIX_ALGORITHMS = ('matrices', 'boxcar')
CALIBRATION_ALGORITHM = 'calibration'

ALGORITHMS = (
    tuple(m.value for m in DecompositionMethod)
    + MATRIX_ALGORITHMS
    + (CALIBRATION_ALGORITHM,)
)

E = TypeVar('E', bound=Enum)


def _parse_enum(enum_cls: Type[E], value: Union[str, E], name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Unrecognised {name} {value!r}. Expected one of "
            f"{[m.value for m in enum_cls]}"
        ) from None


def _check_keys(cls: type, data: Mapping[str, Any]) -> None:
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown {cls.__name__} keys {unknown}. Expected {sorted(known)}"
        )


@dataclass
class CalibrationConfig:
    """Radiometric calibration options.

    Attributes
    ----------
    mode : CalibrationMode
        ``sigma0``, ``gamma0`` or ``beta0``.
    incidence_angle_source : IncidenceAngleSource
        ``ellipsoid`` (no correction) or ``dem``.
    output_db : bool
    output_complex : bool
    """

    mode: CalibrationMode = CalibrationMode.SIGMA0
    incidence_angle_source: IncidenceAngleSource = IncidenceAngleSource.ELLIPSOID
    output_db: bool = False
    output_complex: bool = False

    def __post_init__(self) -> None:
        self.mode = _parse_enum(CalibrationMode, self.mode, 'calibration mode')
        self.incidence_angle_source = _parse_enum(
            IncidenceAngleSource, self.incidence_angle_source,
            'incidence angle source',
        )
        for name in ('output_db', 'output_complex'):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be a bool")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CalibrationConfig':
        _check_keys(cls, data)
        return cls(**data)


@dataclass
class ProcessingConfig:
    """Options for one processing run.

    Attributes
    ----------
    algorithm : str
        A decomposition name (``pauli``, ``sinclair``, ``freeman-durden``,
        ``yamaguchi``, ``cloude-pottier``), ``matrices``, ``boxcar`` or
        ``calibration``.
    window_size : int
        Odd averaging window side. Default 5.
    normalize : bool
        Normalise power decompositions by the image-wide span range.
    h_alpha_plane : str
        ``legacy`` or ``lee`` zone numbering for Cloude-Pottier.
    include_parameters : bool
        Also write entropy, anisotropy and alpha for Cloude-Pottier.
    target_matrix : str
        Output of the ``matrices`` algorithm (C2, C3, C4, T3, T4).
    tile_size : int
        Tile side in pixels. Default 512.
    workers : int, optional
        Worker threads. ``None`` uses the executor default.
    calibration : CalibrationConfig
    """

    algorithm: str = DecompositionMethod.PAULI.value
    window_size: int = 5
    normalize: bool = False
    h_alpha_plane: str = 'legacy'
    include_parameters: bool = False
    target_matrix: str = 'T3'
    tile_size: int = 512
    workers: Optional[int] = None
    calibration: CalibrationConfig = field(default_factory=CalibrationConfig)

    def __post_init__(self) -> None:
        self.algorithm = str(self.algorithm).strip().lower()
        if self.algorithm not in ALGORITHMS:
            raise ConfigurationError(
                f"Unrecognised algorithm {self.algorithm!r}. "
                f"Expected one of {list(ALGORITHMS)}"
            )
        if not _is_int(self.window_size) or self.window_size < 1 \
                or self.window_size % 2 == 0:
            raise ConfigurationError(
                f"window_size must be an odd int >= 1, got {self.window_size!r}"
            )
        self.h_alpha_plane = str(self.h_alpha_plane).strip().lower()
        if self.h_alpha_plane not in ('legacy', 'lee'):
            raise ConfigurationError(
                f"h_alpha_plane must be 'legacy' or 'lee', "
                f"got {self.h_alpha_plane!r}"
            )
        kind = MatrixKind.parse(self.target_matrix)
        if kind.is_raw:
            raise ConfigurationError(
                f"target_matrix must be one of C2, C3, C4, T3, T4, "
                f"got {self.target_matrix!r}"
            )
        self.target_matrix = kind.value
        if not _is_int(self.tile_size) or self.tile_size < 1:
            raise ConfigurationError(
                f"tile_size must be a positive int, got {self.tile_size!r}"
            )
        if self.workers is not None and (
            not _is_int(self.workers) or self.workers < 1
        ):
            raise ConfigurationError(
                f"workers must be a positive int, got {self.workers!r}"
            )
        for name in ('normalize', 'include_parameters'):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be a bool")
        if isinstance(self.calibration, Mapping):
            self.calibration = CalibrationConfig.from_dict(self.calibration)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'ProcessingConfig':
        """Build a config from a plain mapping.

        Raises
        ------
        ConfigurationError
            For unknown keys or invalid values.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        _check_keys(cls, data)
        return cls(**data)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_config(path: Union[str, Path]) -> ProcessingConfig:
    """Read a ``ProcessingConfig`` from a YAML file.

    An empty file yields the defaults.
    """
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f)
    config = ProcessingConfig.from_dict(data)
    logger.info("Loaded configuration from %s: algorithm=%s", path, config.algorithm)
    return config
