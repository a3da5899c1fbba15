# -*- coding: utf-8 -*-
"""
Tile Operators - Decomposition, matrix and calibration operators.

Each operator is built from a configured processor, the product metadata
and the list of source band groups. Construction resolves the matrix kind
of every band group and checks that the processor can run on it, so
configuration errors surface before any tile is fetched.

At tile time an operator fetches the halo-expanded source rectangle,
computes its output over the tile and replaces every pixel whose centre
sample is no-data with the output band's own no-data value. No-data and
non-finite source samples are zeroed before window averaging, so they
never spread into their neighbours.

With more than one source band group, output band names carry the group
id as a suffix (``Freeman_vol_g_t0``).

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
import logging
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

# Third-party
import numpy as np

# GRPOL internal
from grpol.calibration.calibrator import CalibratorState, RadiometricCalibrator
from grpol.config import (
    CALIBRATION_ALGORITHM,
    ProcessingConfig,
)
from grpol.data_prep.base import Rectangle
from grpol.data_prep.tiler import Tiler
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.image_processing.decomposition.base import (
    PolarimetricDecomposition,
    PowerDecomposition,
)
from grpol.image_processing.decomposition.factory import (
    DECOMPOSITIONS,
    create_decomposition,
    parse_method,
)
from grpol.image_processing.filters.speckle import PolarimetricBoxcarFilter
from grpol.image_processing.matrices import MatrixProcessor, PolarimetricMatrices
from grpol.polarimetry.estimator import MatrixEstimator, PixelWindow
from grpol.polarimetry.kinds import MatrixKind
from grpol.runtime.contracts import (
    BandGroup,
    MetadataAccessor,
    TileOperator,
    TileSource,
)
from grpol.runtime.span import SpanStatistic, SpanStatisticCell
from grpol.vocabulary import IncidenceAngleSource, SampleUnit

logger = logging.getLogger(__name__)


class _SourceGroup(NamedTuple):
    id: str
    kind: MatrixKind
    estimator: Optional[MatrixEstimator]
    span: Optional[SpanStatisticCell]


def _check_groups(band_groups: Sequence[str]) -> Tuple[str, ...]:
    groups = tuple(band_groups)
    if not groups:
        raise ConfigurationError("At least one source band group is required")
    if len(set(groups)) != len(groups):
        raise ConfigurationError(f"Duplicate band groups in {list(groups)}")
    return groups


def _mask_no_data(
    values: np.ndarray, no_data: np.ndarray, fill: float
) -> np.ndarray:
    if not np.any(no_data):
        return values
    return np.where(no_data, np.asarray(fill, dtype=values.dtype), values)


def _zero_invalid(data: BandGroup) -> Tuple[Tuple[np.ndarray, ...], np.ndarray]:
    """Buffers with no-data and non-finite pixels zeroed, and the pixel mask.

    Zeroed pixels still count towards the window size of their neighbours
    but add no power to them.
    """
    invalid = data.no_data_mask()
    for buf in data.buffers:
        invalid |= ~np.isfinite(buf)
    if not np.any(invalid):
        return tuple(data.buffers), invalid
    return tuple(np.where(invalid, 0.0, buf) for buf in data.buffers), invalid


class DecompositionOperator(TileOperator):
    """Windowed decomposition of one or more polarimetric band groups.

    Parameters
    ----------
    decomposition : PolarimetricDecomposition
        Configured decomposition or classifier.
    metadata : MetadataAccessor
    band_groups : Sequence[str]
        Source band groups; one output group per source group.
    window_size : int
        Odd averaging window side. Default 5.
    global_tile_size : int
        Tile side used by the span-statistic pass. Default 512.

    Raises
    ------
    ConfigurationError
        If any band group has an unsupported matrix kind.
    """

    def __init__(
        self,
        decomposition: PolarimetricDecomposition,
        metadata: MetadataAccessor,
        band_groups: Sequence[str],
        window_size: int = 5,
        global_tile_size: int = 512,
    ) -> None:
        self.decomposition = decomposition
        self.window = PixelWindow.from_size(window_size)
        self.global_tile_size = global_tile_size
        groups = []
        for gid in _check_groups(band_groups):
            kind = metadata.get_matrix_kind(gid)
            estimator = MatrixEstimator(
                kind, decomposition.estimation_kind(kind), self.window
            )
            cell = SpanStatisticCell(gid) if decomposition.has_global_pass else None
            groups.append(_SourceGroup(gid, kind, estimator, cell))
        self._groups: List[_SourceGroup] = groups
        self._suffix = len(groups) > 1
        logger.debug(
            "DecompositionOperator %r over %s", decomposition,
            [(g.id, g.kind.value) for g in groups],
        )

    @property
    def halo(self) -> Tuple[int, int]:
        return (self.window.half_width, self.window.half_height)

    @property
    def has_global_pass(self) -> bool:
        return self.decomposition.has_global_pass

    def band_name(self, name: str, group_id: str) -> str:
        return f"{name}_{group_id}" if self._suffix else name

    @property
    def output_bands(self) -> Tuple[str, ...]:
        return tuple(
            self.band_name(name, g.id)
            for g in self._groups for name in self.decomposition.band_names
        )

    def _prepared(
        self,
        group: _SourceGroup,
        source: TileSource,
        rect: Rectangle,
        image_shape: Tuple[int, int],
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Prepared averaged matrices and no-data mask over *rect*."""
        outer = rect.expand(*self.halo, image_shape)
        inner = rect.within(outer)
        buffers, invalid = _zero_invalid(source.fetch(group.id, outer))
        matrix = group.estimator.estimate(buffers, outer.origin, image_shape)
        matrix = self.decomposition.prepare(matrix[inner], group.kind)
        return matrix, invalid[inner]

    def span_statistic(
        self,
        group: _SourceGroup,
        source: TileSource,
        image_shape: Tuple[int, int],
    ) -> SpanStatistic:
        """Image-wide span range of *group*, computed on first use."""
        def compute() -> SpanStatistic:
            extents = []
            callbacks = type(self.decomposition).__global_callbacks__
            for rect in Tiler(*image_shape, tile_size=self.global_tile_size):
                matrix, no_data = self._prepared(group, source, rect, image_shape)
                for name in callbacks:
                    extents.append(getattr(self.decomposition, name)(matrix, ~no_data))
            stat = SpanStatistic.from_extents(extents)
            if stat is None:
                logger.warning("Band group %s has no valid pixels", group.id)
                stat = SpanStatistic(0.0, 0.0)
            return stat

        return group.span.get(compute)

    def compute_tile(
        self, source: TileSource, rect: Rectangle, image_shape: Tuple[int, int]
    ) -> Dict[str, np.ndarray]:
        out = {}
        for group in self._groups:
            stat = None
            if group.span is not None:
                stat = self.span_statistic(group, source, image_shape)
            matrix, no_data = self._prepared(group, source, rect, image_shape)
            bands = self.decomposition.to_bands(
                self.decomposition.decompose(matrix), stat
            )
            for name, values in bands.items():
                out[self.band_name(name, group.id)] = _mask_no_data(
                    values, no_data, self.decomposition.no_data_value
                )
        return out


class MatrixOperator(TileOperator):
    """Matrix product or speckle-filtered matrices of band groups.

    Parameters
    ----------
    processor : MatrixProcessor
        ``PolarimetricMatrices`` or ``PolarimetricBoxcarFilter``.
    metadata : MetadataAccessor
    band_groups : Sequence[str]
    """

    def __init__(
        self,
        processor: MatrixProcessor,
        metadata: MetadataAccessor,
        band_groups: Sequence[str],
    ) -> None:
        self.processor = processor
        self._groups = [
            _SourceGroup(gid, kind, processor.estimator(kind), None)
            for gid, kind in (
                (gid, metadata.get_matrix_kind(gid))
                for gid in _check_groups(band_groups)
            )
        ]
        self._suffix = len(self._groups) > 1

    @property
    def halo(self) -> Tuple[int, int]:
        window = self.processor.window
        return (window.half_width, window.half_height)

    def band_name(self, name: str, group_id: str) -> str:
        return f"{name}_{group_id}" if self._suffix else name

    @property
    def output_bands(self) -> Tuple[str, ...]:
        return tuple(
            self.band_name(name, g.id)
            for g in self._groups for name in self.processor.band_names(g.kind)
        )

    def compute_tile(
        self, source: TileSource, rect: Rectangle, image_shape: Tuple[int, int]
    ) -> Dict[str, np.ndarray]:
        outer = rect.expand(*self.halo, image_shape)
        inner = rect.within(outer)
        out = {}
        for group in self._groups:
            buffers, invalid = _zero_invalid(source.fetch(group.id, outer))
            no_data = invalid[inner]
            bands = self.processor.apply(
                buffers, group.kind, outer.origin, image_shape
            )
            for name, values in bands.items():
                out[self.band_name(name, group.id)] = _mask_no_data(
                    values[inner], no_data, self.processor.no_data_value
                )
        return out


class CalibrationOperator(TileOperator):
    """Radiometric calibration of one band group per polarisation.

    Each band group holds one detected band (amplitude, intensity or
    intensity in dB) or an ``i``/``q`` pair (unit ``REAL``). Output bands
    are named from the calibration mode and the group id, for example
    ``Sigma0_HH``, ``Sigma0_HH_db`` or ``i_Sigma0_HH``/``q_Sigma0_HH``.

    Parameters
    ----------
    calibrator : RadiometricCalibrator
        Initialised here if still ``UNINITIALIZED``.
    metadata : MetadataAccessor
    band_groups : Sequence[str]
        Group ids, typically polarisations (``'HH'``, ``'HV'``).

    Raises
    ------
    ConfigurationError
        For an unusable LUT, a calibrated product, unhandled sample units,
        or a DEM correction without an incidence angle raster.
    """

    no_data_value: float = 0.0

    def __init__(
        self,
        calibrator: RadiometricCalibrator,
        metadata: MetadataAccessor,
        band_groups: Sequence[str],
    ) -> None:
        groups = _check_groups(band_groups)
        if calibrator.state is CalibratorState.UNINITIALIZED:
            calibrator.initialize(metadata, metadata.image_shape()[1])
        self.calibrator = calibrator
        self.metadata = metadata
        self._units: Dict[str, SampleUnit] = {}
        for gid in groups:
            unit = metadata.get_sample_unit(gid)
            if unit is SampleUnit.IMAGINARY:
                raise ConfigurationError(
                    f"Unhandled unit {unit.value!r} for band group {gid!r}"
                )
            if calibrator.output_complex and unit is not SampleUnit.REAL:
                raise ConfigurationError(
                    f"Complex output needs i/q bands, band group {gid!r} "
                    f"is {unit.value}"
                )
            self._units[gid] = unit
        self._dem = (calibrator.incidence_angle_source
                     is IncidenceAngleSource.DEM)
        if self._dem and metadata.get_incidence_angle(Rectangle(0, 0, 1, 1)) is None:
            raise ConfigurationError(
                "DEM incidence-angle correction requested but the product has "
                "no local incidence angle"
            )

    @property
    def halo(self) -> Tuple[int, int]:
        return (0, 0)

    def group_bands(self, group_id: str) -> Tuple[str, ...]:
        prefix = self.calibrator.mode.band_prefix
        if self.calibrator.output_complex:
            return (f"i_{prefix}_{group_id}", f"q_{prefix}_{group_id}")
        suffix = '_db' if self.calibrator.output_db else ''
        return (f"{prefix}_{group_id}{suffix}",)

    @property
    def output_bands(self) -> Tuple[str, ...]:
        return tuple(name for gid in self._units for name in self.group_bands(gid))

    def compute_tile(
        self, source: TileSource, rect: Rectangle, image_shape: Tuple[int, int]
    ) -> Dict[str, np.ndarray]:
        columns = rect.columns()
        angle = self.metadata.get_incidence_angle(rect) if self._dem else None
        out = {}
        for gid, unit in self._units.items():
            data = source.fetch(gid, rect)
            expected = 2 if unit is SampleUnit.REAL else 1
            if len(data.buffers) != expected:
                raise ValidationError(
                    f"Band group {gid!r} ({unit.value}) needs {expected} "
                    f"band(s), got {len(data.buffers)}"
                )
            no_data = data.no_data_mask()
            names = self.group_bands(gid)
            if self.calibrator.output_complex:
                values = self.calibrator.calibrate_complex(
                    data.buffers[0], data.buffers[1], columns, angle
                )
            else:
                imaginary = data.buffers[1] if expected == 2 else None
                values = (self.calibrator.calibrate(
                    data.buffers[0], unit, columns, imaginary, angle
                ),)
            for name, band in zip(names, values):
                out[name] = _mask_no_data(band, no_data, self.no_data_value)
        return out


def build_operator(
    config: ProcessingConfig,
    metadata: MetadataAccessor,
    band_groups: Sequence[str],
) -> TileOperator:
    """Construct and validate the operator for a processing run.

    Parameters
    ----------
    config : ProcessingConfig
    metadata : MetadataAccessor
    band_groups : Sequence[str]
        Source band groups.

    Returns
    -------
    TileOperator

    Raises
    ------
    ConfigurationError
        For any option the product cannot support.
    """
    algorithm = config.algorithm
    if algorithm == CALIBRATION_ALGORITHM:
        cal = config.calibration
        calibrator = RadiometricCalibrator(
            mode=cal.mode,
            incidence_angle_source=cal.incidence_angle_source,
            output_db=cal.output_db,
            output_complex=cal.output_complex,
        )
        return CalibrationOperator(calibrator, metadata, band_groups)

    try:
        if algorithm == 'matrices':
            processor = PolarimetricMatrices(
                target=config.target_matrix, window_size=config.window_size
            )
            return MatrixOperator(processor, metadata, band_groups)
        if algorithm == 'boxcar':
            processor = PolarimetricBoxcarFilter(window_size=config.window_size)
            return MatrixOperator(processor, metadata, band_groups)
    except ValidationError as exc:
        raise ConfigurationError(f"{algorithm}: {exc}") from exc

    method = parse_method(algorithm)
    if issubclass(DECOMPOSITIONS[method], PowerDecomposition):
        params = {'normalize': config.normalize}
    else:
        params = {
            'plane': config.h_alpha_plane,
            'include_parameters': config.include_parameters,
        }
    decomposition = create_decomposition(method, **params)
    return DecompositionOperator(
        decomposition, metadata, band_groups,
        window_size=config.window_size, global_tile_size=config.tile_size,
    )
