# -*- coding: utf-8 -*-
"""
Runtime Contracts - Interfaces between operators and their collaborators.

The tile runtime talks to three external collaborators:

- ``TileSource`` delivers the channel buffers of a band group over a
  rectangle, together with each band's no-data sentinel.
- ``TileSink`` receives computed output samples per band and rectangle.
- ``MetadataAccessor`` answers product-level questions (matrix kind of a
  band group, calibration LUTs, incidence angles, product flags).

``TileOperator`` is the interface the executor drives. The in-memory
``ArrayTileSource``, ``ArrayTileSink`` and ``DictMetadata`` implement the
contracts over numpy arrays and dictionaries.

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
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Mapping, NamedTuple, Optional, Sequence, Tuple

# Third-party
import numpy as np

# GRPOL internal
from grpol.data_prep.base import Rectangle
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.polarimetry.kinds import MatrixKind
from grpol.vocabulary import SampleUnit


class BandGroup(NamedTuple):
    """Channel buffers of one band group over one rectangle.

    Attributes
    ----------
    names : Tuple[str, ...]
        Band names in channel order.
    buffers : Tuple[np.ndarray, ...]
        One ``(rows, cols)`` real buffer per band.
    no_data : Tuple[Optional[float], ...]
        Per-band no-data sentinel, ``None`` when the band has none.
    """

    names: Tuple[str, ...]
    buffers: Tuple[np.ndarray, ...]
    no_data: Tuple[Optional[float], ...]

    def no_data_mask(self) -> np.ndarray:
        """Pixels where any band equals its own no-data sentinel."""
        mask = np.zeros(np.shape(self.buffers[0]), dtype=bool)
        for buf, sentinel in zip(self.buffers, self.no_data):
            if sentinel is None:
                continue
            if np.isnan(sentinel):
                mask |= np.isnan(buf)
            else:
                mask |= buf == sentinel
        return mask


class TileSource(ABC):
    """Provider of source channel buffers."""

    @property
    @abstractmethod
    def image_shape(self) -> Tuple[int, int]:
        """``(rows, cols)`` of the source product."""
        ...

    @abstractmethod
    def fetch(self, band_group_id: str, rect: Rectangle) -> BandGroup:
        """Channel buffers of *band_group_id* over *rect*."""
        ...


class TileSink(ABC):
    """Receiver of computed output samples."""

    @abstractmethod
    def write(self, band_id: str, rect: Rectangle, values: np.ndarray) -> None:
        ...


class MetadataAccessor(ABC):
    """Read-only product metadata."""

    @abstractmethod
    def image_shape(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def get_matrix_kind(self, band_group_id: str) -> MatrixKind:
        """Polarimetric layout of a band group.

        Raises
        ------
        ConfigurationError
            If the band group is not a polarimetric product.
        """
        ...

    @abstractmethod
    def get_lut(self, name: str) -> Optional[Tuple[float, np.ndarray]]:
        """``(offset, gains)`` of a calibration LUT, or ``None``."""
        ...

    @abstractmethod
    def get_incidence_angle(self, rect: Rectangle) -> Optional[np.ndarray]:
        """Local incidence angle in degrees over *rect*, or ``None``."""
        ...

    @abstractmethod
    def is_calibrated(self) -> bool:
        ...

    @abstractmethod
    def is_slc(self) -> bool:
        ...

    def get_sample_unit(self, band_group_id: str) -> SampleUnit:
        """Unit of the first band of a group; raw ``i``/``q`` pairs are ``REAL``."""
        return SampleUnit.INTENSITY

    def subset_offset_x(self) -> int:
        """Product column of the source's first column."""
        return 0


class TileOperator(ABC):
    """A per-tile computation driven by ``TileExecutor``.

    Operators are fully configured and validated at construction; after
    that ``compute_tile`` may be called concurrently from worker threads.
    """

    @property
    @abstractmethod
    def halo(self) -> Tuple[int, int]:
        """``(halo_x, halo_y)`` read around every tile."""
        ...

    @property
    @abstractmethod
    def output_bands(self) -> Tuple[str, ...]:
        ...

    @property
    def has_global_pass(self) -> bool:
        return False

    @abstractmethod
    def compute_tile(
        self, source: TileSource, rect: Rectangle, image_shape: Tuple[int, int]
    ) -> Dict[str, np.ndarray]:
        """Output samples for every band over *rect*."""
        ...


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------

class ArrayTileSource(TileSource):
    """Tile source over in-memory rasters.

    Parameters
    ----------
    bands : Mapping[str, np.ndarray]
        Full-image ``(rows, cols)`` rasters keyed by band name.
    groups : Mapping[str, Sequence[str]]
        Band names of each band group, in channel order.
    no_data : Mapping[str, float], optional
        No-data sentinel per band name.
    """

    def __init__(
        self,
        bands: Mapping[str, np.ndarray],
        groups: Mapping[str, Sequence[str]],
        no_data: Optional[Mapping[str, float]] = None,
    ) -> None:
        if not bands:
            raise ValidationError("ArrayTileSource needs at least one band")
        self._bands = {name: np.asarray(arr) for name, arr in bands.items()}
        shapes = {arr.shape for arr in self._bands.values()}
        if len(shapes) != 1 or len(next(iter(shapes))) != 2:
            raise ValidationError(
                f"All bands must share one 2D shape, got {sorted(shapes)}"
            )
        self._shape = next(iter(shapes))
        for gid, names in groups.items():
            missing = [n for n in names if n not in self._bands]
            if missing:
                raise ValidationError(f"Band group {gid!r} references {missing}")
        self._groups = {gid: tuple(names) for gid, names in groups.items()}
        self._no_data = dict(no_data or {})
        self._lock = threading.Lock()
        self.fetch_count = 0

    @property
    def image_shape(self) -> Tuple[int, int]:
        return self._shape

    def fetch(self, band_group_id: str, rect: Rectangle) -> BandGroup:
        try:
            names = self._groups[band_group_id]
        except KeyError:
            raise ValidationError(f"Unknown band group {band_group_id!r}") from None
        with self._lock:
            self.fetch_count += 1
        return BandGroup(
            names,
            tuple(self._bands[n][rect.slices].astype(np.float64) for n in names),
            tuple(self._no_data.get(n) for n in names),
        )


class ArrayTileSink(TileSink):
    """Tile sink that assembles full-image float64 rasters.

    Unwritten pixels stay ``NaN``.
    """

    def __init__(self, image_shape: Tuple[int, int]) -> None:
        self._shape = tuple(image_shape)
        self._bands: Dict[str, np.ndarray] = {}
        self._lock = threading.Lock()

    def write(self, band_id: str, rect: Rectangle, values: np.ndarray) -> None:
        if np.shape(values) != rect.shape:
            raise ValidationError(
                f"Band {band_id!r}: values {np.shape(values)} do not fit {rect}"
            )
        with self._lock:
            out = self._bands.get(band_id)
            if out is None:
                out = np.full(self._shape, np.nan, dtype=np.float64)
                self._bands[band_id] = out
        out[rect.slices] = values

    @property
    def bands(self) -> Dict[str, np.ndarray]:
        return dict(self._bands)

    def __getitem__(self, band_id: str) -> np.ndarray:
        return self._bands[band_id]


@dataclass
class DictMetadata(MetadataAccessor):
    """Metadata held in plain dictionaries.

    Attributes
    ----------
    shape : Tuple[int, int]
        Product ``(rows, cols)``.
    matrix_kinds : Dict[str, MatrixKind]
        Layout of each polarimetric band group.
    luts : Dict[str, Tuple[float, np.ndarray]]
        Calibration tables keyed by ``lutSigma``/``lutGamma``/``lutBeta``.
    incidence_angle : np.ndarray, optional
        Full-image local incidence angle in degrees.
    calibrated, slc : bool
        Product flags.
    sample_units : Dict[str, SampleUnit]
        Unit of each calibration band group. Default ``INTENSITY``.
    subset_offset : int
        Product column of the first source column.
    """

    shape: Tuple[int, int]
    matrix_kinds: Dict[str, MatrixKind] = field(default_factory=dict)
    luts: Dict[str, Tuple[float, np.ndarray]] = field(default_factory=dict)
    incidence_angle: Optional[np.ndarray] = None
    calibrated: bool = False
    slc: bool = False
    sample_units: Dict[str, SampleUnit] = field(default_factory=dict)
    subset_offset: int = 0

    def image_shape(self) -> Tuple[int, int]:
        return tuple(self.shape)

    def get_matrix_kind(self, band_group_id: str) -> MatrixKind:
        try:
            return MatrixKind.parse(self.matrix_kinds[band_group_id])
        except KeyError:
            raise ConfigurationError(
                f"Input should be a polarimetric product: band group "
                f"{band_group_id!r} has no matrix kind"
            ) from None

    def get_lut(self, name: str) -> Optional[Tuple[float, np.ndarray]]:
        return self.luts.get(name)

    def get_incidence_angle(self, rect: Rectangle) -> Optional[np.ndarray]:
        if self.incidence_angle is None:
            return None
        return np.asarray(self.incidence_angle, dtype=np.float64)[rect.slices]

    def is_calibrated(self) -> bool:
        return self.calibrated

    def is_slc(self) -> bool:
        return self.slc

    def get_sample_unit(self, band_group_id: str) -> SampleUnit:
        return self.sample_units.get(band_group_id, SampleUnit.INTENSITY)

    def subset_offset_x(self) -> int:
        return self.subset_offset
