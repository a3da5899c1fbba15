# -*- coding: utf-8 -*-
"""
GRPOL Exception Hierarchy - Domain-specific exceptions for GRPOL operations.

Provides a small exception hierarchy that lets callers catch GRPOL-specific
errors distinctly from Python built-in exceptions. All GRPOL exceptions
subclass both ``GrpolError`` and the appropriate built-in exception so that
existing ``except ValueError`` handlers keep working.

Numeric degeneracies inside a pixel (zero denominators, non-finite
eigenvalues, empty windows) are never raised. They are resolved per pixel
by flooring, zeroing, or emitting the no-data class.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-06

Modified
--------
2026-03-02
"""


class GrpolError(Exception):
    """Base exception for all GRPOL errors."""


class ValidationError(GrpolError, ValueError):
    """Invalid input data or parameters.

    Raised for shape mismatches, wrong channel counts, out-of-range
    parameters, and other input validation failures.
    """


class ConfigurationError(GrpolError, ValueError):
    """Terminal configuration error detected before any tile is processed.

    Raised for unsupported source/target matrix combinations, upsizing
    requests, missing or undersized calibration LUTs, redundant
    calibration, and unrecognised algorithm names.
    """


class ProcessorError(GrpolError, RuntimeError):
    """Algorithm or processing failure during tile execution.

    Raised when a tile worker encounters a non-recoverable error. The run
    is aborted and the original exception is chained as ``__cause__``.
    """
