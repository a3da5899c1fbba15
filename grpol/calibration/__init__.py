# -*- coding: utf-8 -*-
"""
Calibration Module - LUT-based radiometric calibration.

Key Classes
-----------
- CalibrationLUT: Immutable offset and per-column gains
- RadiometricCalibrator: UNINITIALIZED -> LUT_LOADED -> READY calibrator

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
2026-02-26

Modified
--------
2026-03-06
"""

from grpol.calibration.lut import CalibrationLUT, load_lut
from grpol.calibration.calibrator import CalibratorState, RadiometricCalibrator

__all__ = [
    'CalibrationLUT',
    'load_lut',
    'CalibratorState',
    'RadiometricCalibrator',
]
