# -*- coding: utf-8 -*-
"""
Tile Executor - Run a tile operator over a whole image on a thread pool.

Plans a row-major tile grid, submits one task per tile to a
``ThreadPoolExecutor`` and writes every returned band into the sink. The
first failing tile aborts the run: pending tiles are cancelled and the
error is raised once as ``ProcessorError``. Nothing is retried.

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
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Tuple, Union

# GRPOL internal
from grpol.data_prep.base import Rectangle
from grpol.data_prep.tiler import Tiler
from grpol.exceptions import ProcessorError, ValidationError
from grpol.runtime.contracts import TileOperator, TileSink, TileSource

logger = logging.getLogger(__name__)


class TileExecutor:
    """Drive a ``TileOperator`` over every tile of a source.

    Parameters
    ----------
    operator : TileOperator
        Fully configured operator.
    source : TileSource
    sink : TileSink
    tile_size : int or Tuple[int, int]
        Tile dimensions. Default 512.
    workers : int, optional
        Worker threads. ``None`` lets ``ThreadPoolExecutor`` decide.

    Examples
    --------
    >>> sink = ArrayTileSink(source.image_shape)
    >>> TileExecutor(operator, source, sink, tile_size=256, workers=4).run()
    >>> sink['Freeman_vol_g']
    """

    def __init__(
        self,
        operator: TileOperator,
        source: TileSource,
        sink: TileSink,
        tile_size: Union[int, Tuple[int, int]] = 512,
        workers: Optional[int] = None,
    ) -> None:
        if workers is not None and workers < 1:
            raise ValidationError(f"workers must be >= 1, got {workers}")
        self.operator = operator
        self.source = source
        self.sink = sink
        self.workers = workers
        self._tiler = Tiler(*source.image_shape, tile_size=tile_size)

    @property
    def tiler(self) -> Tiler:
        return self._tiler

    def _process(self, rect: Rectangle) -> None:
        bands = self.operator.compute_tile(self.source, rect, self._tiler.shape)
        for band_id, values in bands.items():
            self.sink.write(band_id, rect, values)
        logger.debug("Tile %s written (%d bands)", rect, len(bands))

    def run(self) -> int:
        """Process every tile.

        Returns
        -------
        int
            Number of tiles written.

        Raises
        ------
        ProcessorError
            Wrapping the first exception raised by any tile.
        """
        tiles = self._tiler.tile_positions()
        logger.info(
            "Running %s over %d tiles of %s (workers=%s, global pass=%s)",
            type(self.operator).__name__, len(tiles), self._tiler.tile_size,
            self.workers, self.operator.has_global_pass,
        )
        start = time.perf_counter()
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            futures = {pool.submit(self._process, rect): rect for rect in tiles}
            for future in as_completed(futures):
                exc = future.exception()
                if exc is None:
                    continue
                for pending in futures:
                    pending.cancel()
                rect = futures[future]
                logger.error("Tile %s failed: %s", rect, exc)
                raise ProcessorError(
                    f"Processing failed on tile {tuple(rect)}: {exc}"
                ) from exc
        logger.info(
            "Finished %d tiles in %.2f s", len(tiles), time.perf_counter() - start
        )
        return len(tiles)
