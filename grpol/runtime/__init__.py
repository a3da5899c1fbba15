# -*- coding: utf-8 -*-
"""
Runtime Module - Tile orchestration for polarimetric processing.

Key Classes
-----------
- TileSource, TileSink, MetadataAccessor: Collaborator interfaces
- ArrayTileSource, ArrayTileSink, DictMetadata: In-memory implementations
- SpanStatistic, SpanStatisticCell: Image-wide span range, computed once
- TileExecutor: Thread-pool driver with fail-fast error handling
- DecompositionOperator, MatrixOperator, CalibrationOperator: Tile operators
- build_operator: Operator construction from a ``ProcessingConfig``

Usage
-----
    >>> from grpol.config import ProcessingConfig
    >>> from grpol.runtime import ArrayTileSink, TileExecutor, build_operator
    >>> config = ProcessingConfig(algorithm='yamaguchi', window_size=5)
    >>> operator = build_operator(config, metadata, ['quad'])
    >>> sink = ArrayTileSink(source.image_shape)
    >>> TileExecutor(operator, source, sink, tile_size=config.tile_size).run()

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

from grpol.runtime.contracts import (
    ArrayTileSink,
    ArrayTileSource,
    BandGroup,
    DictMetadata,
    MetadataAccessor,
    TileOperator,
    TileSink,
    TileSource,
)
from grpol.runtime.span import SpanStatistic, SpanStatisticCell
from grpol.runtime.executor import TileExecutor
from grpol.runtime.operators import (
    CalibrationOperator,
    DecompositionOperator,
    MatrixOperator,
    build_operator,
)

__all__ = [
    'ArrayTileSink',
    'ArrayTileSource',
    'BandGroup',
    'DictMetadata',
    'MetadataAccessor',
    'TileOperator',
    'TileSink',
    'TileSource',
    'SpanStatistic',
    'SpanStatisticCell',
    'TileExecutor',
    'CalibrationOperator',
    'DecompositionOperator',
    'MatrixOperator',
    'build_operator',
]
