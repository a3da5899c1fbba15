# -*- coding: utf-8 -*-
"""
Filters Sub-module - Polarimetric speckle filters.

Key Classes
-----------
- PolarimetricBoxcarFilter: Clamped boxcar averaging of the full matrix

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
2026-02-11

Modified
--------
2026-03-06
"""

from grpol.image_processing.filters.speckle import PolarimetricBoxcarFilter

__all__ = [
    'PolarimetricBoxcarFilter',
]
