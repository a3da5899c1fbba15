# -*- coding: utf-8 -*-
"""
Processor Versioning - Version, capability, and global-pass decorators.

Provides the ``@processor_version`` class decorator that stamps a semantic
version on any processor, ``@processor_tags`` for modality and category
metadata, and ``@globalprocessor`` for methods that must see the entire
image before any tile output is produced (for example the image-wide span
statistic used to normalise decomposition powers).

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
2026-03-04
"""

# Standard library
import importlib.metadata
from typing import Callable, Optional, Sequence, Type, TypeVar

# GRPOL internal
from grpol.vocabulary import ImageModality, ProcessorCategory

T = TypeVar('T')
F = TypeVar('F', bound=Callable)


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps ``__processor_version__`` on a processor.

    If *version* is omitted the installed ``grpol`` distribution version is
    used, or ``'unknown'`` when the package metadata is unavailable.

    Parameters
    ----------
    version : str, optional
        Semantic version string (e.g., ``'1.0.0'``).

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class MyDecomposition(PolarimetricDecomposition):
    ...     ...
    >>> MyDecomposition.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('grpol')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def processor_tags(
    modalities: Optional[Sequence[ImageModality]] = None,
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
):
    """Class decorator for processor capability metadata.

    Stamps ``__processor_tags__`` on the class.

    Parameters
    ----------
    modalities : Sequence[ImageModality], optional
        Imagery modalities this processor is designed for.
    category : ProcessorCategory, optional
        Processing category.
    description : str, optional
        Short human-readable description.

    Raises
    ------
    TypeError
        If a modality or the category is not the correct enum, so typos
        fail at import time.
    """
    if modalities is not None:
        for m in modalities:
            if not isinstance(m, ImageModality):
                raise TypeError(
                    f"modalities must be ImageModality members, got {m!r}"
                )
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'modalities': tuple(modalities) if modalities else (),
            'category': category,
            'description': description,
        }
        return cls
    return decorator


def globalprocessor(method: F) -> F:
    """Mark a processor method as a whole-image (global pass) callback.

    ``ImageProcessor.__init_subclass__`` collects marked methods into
    ``__global_callbacks__``. The first tile request of a run streams
    every tile of the image through them, once, and every output tile
    waits for that pass to finish.

    Returns
    -------
    Callable
        The same function object, with ``__is_global_callback__`` set.
    """
    method.__is_global_callback__ = True
    return method
