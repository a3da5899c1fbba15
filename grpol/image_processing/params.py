# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative parameter constraints via typing.Annotated.

Provides the constraint markers (``Range``, ``Options``, ``Desc``) that
processors place inside ``typing.Annotated`` class-body annotations, the
``ParamSpec`` record built from them, and the helpers consumed by
``ImageProcessor.__init_subclass__``.

Usage
-----
Declare tunable parameters as class-body annotations::

    from typing import Annotated
    from grpol.image_processing.params import Range, Options, Desc

    class MyDecomposition(PolarimetricDecomposition):
        window_size: Annotated[int, Range(min=1, max=31), Desc('Window')] = 5
        plane: Annotated[str, Options('legacy', 'lee'), Desc('Zones')] = 'legacy'

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
2026-02-10

Modified
--------
2026-03-04
"""

# Standard library
import inspect
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# GRPOL internal
from grpol.exceptions import ValidationError


# =====================================================================
# Constraint markers
# =====================================================================

class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types."""


class Range(ParamMeta):
    """Inclusive numeric range constraint.

    Parameters
    ----------
    min : int or float, optional
        Minimum allowed value (inclusive).
    max : int or float, optional
        Maximum allowed value (inclusive).
    """

    __slots__ = ('min', 'max')

    def __init__(
        self,
        min: Optional[Union[int, float]] = None,
        max: Optional[Union[int, float]] = None,
    ) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        return f"Range(min={self.min!r}, max={self.max!r})"


class Options(ParamMeta):
    """Discrete choice constraint."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """Human-readable parameter description."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# =====================================================================
# ParamSpec
# =====================================================================

_SENTINEL = object()


class ParamSpec:
    """Resolved specification for one tunable parameter.

    Attributes
    ----------
    name : str
    param_type : type
    default : Any
    description : str
    min_value, max_value : int, float, or None
    choices : tuple or None
    """

    __slots__ = (
        'name', 'param_type', 'default', 'has_default',
        'description', 'min_value', 'max_value', 'choices',
    )

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any = _SENTINEL,
        description: str = '',
        min_value: Optional[Union[int, float]] = None,
        max_value: Optional[Union[int, float]] = None,
        choices: Optional[Tuple] = None,
    ) -> None:
        self.name = name
        self.param_type = param_type
        self.has_default = default is not _SENTINEL
        self.default = default if self.has_default else None
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices

    @property
    def required(self) -> bool:
        return not self.has_default

    def validate(self, value: Any) -> None:
        """Check *value* against the declared type and constraints.

        ``int`` is accepted for ``float`` parameters; ``bool`` is never
        accepted for numeric ones.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        ValidationError
            If *value* violates a range or choices constraint.
        """
        numeric = self.param_type in (int, float)
        if numeric and isinstance(value, bool):
            raise TypeError(
                f"Parameter '{self.name}' must be {self.param_type.__name__}, "
                f"got bool"
            )
        accepted = (int, float) if self.param_type is float else self.param_type
        if self.param_type is not object and not isinstance(value, accepted):
            raise TypeError(
                f"Parameter '{self.name}' must be {self.param_type.__name__}, "
                f"got {type(value).__name__}"
            )
        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is not in allowed choices {self.choices!r}"
            )

    def __repr__(self) -> str:
        return (
            f"ParamSpec(name={self.name!r}, "
            f"param_type={self.param_type.__name__}, "
            f"default={self.default!r})"
        )


# =====================================================================
# Collection and __init__ generation
# =====================================================================

def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Parse ``Annotated`` hints on *cls* into ``ParamSpec`` records.

    Fields are ordered parent-first, in declaration order.

    Raises
    ------
    TypeError
        If a field carries both ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    ordered = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name in hints and name not in ordered:
                ordered.append(name)

    specs = []
    for name in ordered:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue
        rng = next((m for m in metas if isinstance(m, Range)), None)
        opts = next((m for m in metas if isinstance(m, Options)), None)
        desc = next((m for m in metas if isinstance(m, Desc)), None)
        if rng is not None and opts is not None:
            raise TypeError(
                f"Parameter '{name}' on {cls.__qualname__}: "
                f"Range and Options are mutually exclusive."
            )
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=getattr(cls, name, _SENTINEL),
            description=desc.text if desc else '',
            min_value=rng.min if rng else None,
            max_value=rng.max if rng else None,
            choices=opts.choices if opts else None,
        ))
    return tuple(specs)


def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Build a keyword-only ``__init__`` that validates and stores params.

    Calls ``self.__post_init__()`` afterwards when the class defines one.
    """
    specs = param_specs

    def __init__(self, **kwargs):
        expected = {s.name for s in specs}
        unexpected = set(kwargs) - expected
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif spec.has_default:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required "
                    f"keyword argument: '{spec.name}'"
                )
            spec.validate(value)
            object.__setattr__(self, spec.name, value)
        if hasattr(self, '__post_init__'):
            self.__post_init__()

    params = [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in specs:
        params.append(inspect.Parameter(
            spec.name,
            inspect.Parameter.KEYWORD_ONLY,
            default=spec.default if spec.has_default else inspect.Parameter.empty,
        ))
    __init__.__signature__ = inspect.Signature(params)
    __init__.__qualname__ = '__init__'
    return __init__
