# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for polarimetric processors.

Defines the ``ImageProcessor`` common base class for every processor in
the package (decompositions, matrix writers, speckle filters) and the
``ImageTransform`` ABC for dense raster transforms. ``ImageProcessor``
provides version checking at first instantiation, ``typing.Annotated``
tunable parameter declarations with automatic ``__init__`` generation,
runtime resolution through ``**kwargs``, and discovery of
``@globalprocessor`` callbacks.

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
2026-03-04
"""

# Standard library
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# GRPOL internal
from grpol.image_processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all processors.

    **Version checking**: concrete subclasses that do not declare a
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning``
    at first instantiation. The check runs in ``__new__`` so that class
    decorators have already been applied.

    **Tunable parameters**: subclasses declare parameters as
    ``typing.Annotated`` class-body fields with ``Range``, ``Options`` and
    ``Desc`` markers. ``__init_subclass__`` collects them into
    ``__param_specs__`` and generates an ``__init__`` unless the subclass
    defines one. ``_resolve_params(kwargs)`` merges instance values with
    per-call overrides.

    **Global pass**: methods decorated with ``@globalprocessor`` are
    collected into ``__global_callbacks__``.
    """

    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    #: Method names decorated with ``@globalprocessor``.
    __global_callbacks__: Tuple[str, ...] = ()

    #: Whether this processor class has any global-pass callbacks.
    __has_global_pass__: bool = False

    @property
    def has_global_pass(self) -> bool:
        """Whether the executor must run a whole-image pass first.

        Returns
        -------
        bool
        """
        return type(self).__has_global_pass__

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

        new_callbacks = [
            name for name, attr in cls.__dict__.items()
            if callable(attr) and getattr(attr, '__is_global_callback__', False)
        ]
        parent_callbacks = getattr(super(cls, cls), '__global_callbacks__', ())
        cls.__global_callbacks__ = tuple(
            dict.fromkeys((*parent_callbacks, *new_callbacks))
        )
        cls.__has_global_pass__ = bool(cls.__global_callbacks__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance parameter values with runtime *kwargs* overrides.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments. Keys that are not declared
            parameters are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        ValidationError
            If a value violates range or choices constraints.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs.get(spec.name, getattr(self, spec.name))
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(self, kwargs: Dict[str, Any], fraction: float) -> None:
        """Forward a progress fraction to an optional ``progress_callback``."""
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class ImageTransform(ImageProcessor):
    """
    Abstract base class for dense raster transforms.

    Subclasses implement ``apply`` which maps a source array to an output
    array of the same spatial shape.
    """

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform to a source image array.

        Parameters
        ----------
        source : np.ndarray
            Input image of any shape accepted by the subclass.

        Returns
        -------
        np.ndarray
            Transformed image.
        """
        ...
