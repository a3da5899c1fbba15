# -*- coding: utf-8 -*-
"""
Tunable Parameter Tests - Annotated parameters, versioning and global pass.

Tests constraint markers, ``ParamSpec`` validation, generated ``__init__``,
``@processor_version``, ``@processor_tags`` and ``@globalprocessor``
collection on processor classes.

Dependencies
------------
pytest

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
2026-03-06
"""

import warnings
from typing import Annotated, Any

import numpy as np
import pytest

from grpol.exceptions import ValidationError
from grpol.image_processing import (
    FreemanDurdenDecomposition,
    PauliDecomposition,
    PolarimetricBoxcarFilter,
    ToDecibels,
)
from grpol.image_processing.base import ImageProcessor, ImageTransform
from grpol.image_processing.params import (
    Desc,
    Options,
    ParamMeta,
    ParamSpec,
    Range,
    collect_param_specs,
)
from grpol.image_processing.versioning import (
    globalprocessor,
    processor_tags,
    processor_version,
)
from grpol.vocabulary import ImageModality, ProcessorCategory


# ---------------------------------------------------------------------------
# Constraint markers
# ---------------------------------------------------------------------------

class TestMarkers:

    def test_range(self):
        r = Range(min=0.0, max=1.0)
        assert (r.min, r.max) == (0.0, 1.0)
        assert isinstance(r, ParamMeta)

    def test_options_empty_raises(self):
        with pytest.raises(ValueError, match="at least one"):
            Options()

    def test_desc(self):
        assert Desc('A description').text == 'A description'


# ---------------------------------------------------------------------------
# ParamSpec validation
# ---------------------------------------------------------------------------

class TestParamSpec:

    def test_range_violation(self):
        spec = ParamSpec('size', int, default=3, min_value=3, max_value=31)
        with pytest.raises(ValidationError, match='below minimum'):
            spec.validate(1)
        with pytest.raises(ValidationError, match='above maximum'):
            spec.validate(33)

    def test_choices_violation(self):
        spec = ParamSpec('plane', str, default='legacy', choices=('legacy', 'lee'))
        with pytest.raises(ValidationError, match='allowed choices'):
            spec.validate('other')

    def test_bool_rejected_for_numeric(self):
        spec = ParamSpec('size', int, default=3)
        with pytest.raises(TypeError):
            spec.validate(True)

    def test_int_accepted_for_float(self):
        ParamSpec('eps', float, default=0.1).validate(1)

    def test_required(self):
        assert ParamSpec('x', int).required
        assert not ParamSpec('x', int, default=0).required


# ---------------------------------------------------------------------------
# Generated __init__
# ---------------------------------------------------------------------------

@processor_version('0.0.1')
class _Tunable(ImageTransform):
    sigma: Annotated[float, Range(min=0.0, max=10.0), Desc('Smoothing')] = 1.0
    mode: Annotated[str, Options('a', 'b')] = 'a'

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        self._report_progress(kwargs, 1.0)
        return source * params['sigma']


class TestGeneratedInit:

    def test_collects_specs_in_order(self):
        assert [s.name for s in collect_param_specs(_Tunable)] == ['sigma', 'mode']

    def test_defaults(self):
        t = _Tunable()
        assert t.sigma == 1.0
        assert t.mode == 'a'

    def test_keyword_values(self):
        assert _Tunable(sigma=2.5, mode='b').sigma == 2.5

    def test_unknown_keyword(self):
        with pytest.raises(TypeError, match='unexpected'):
            _Tunable(window=3)

    def test_invalid_value(self):
        with pytest.raises(ValidationError):
            _Tunable(sigma=-1.0)

    def test_runtime_override(self):
        out = _Tunable(sigma=2.0).apply(np.ones(3), sigma=3.0)
        np.testing.assert_array_equal(out, np.full(3, 3.0))

    def test_progress_callback(self):
        seen = []
        _Tunable().apply(np.ones(2), progress_callback=seen.append)
        assert seen == [1.0]

    def test_boxcar_post_init_rejects_even_window(self):
        with pytest.raises(ValidationError, match='odd'):
            PolarimetricBoxcarFilter(window_size=4)


# ---------------------------------------------------------------------------
# Versioning and tags
# ---------------------------------------------------------------------------

class TestProcessorVersion:

    def test_stamps_version(self):
        @processor_version('2.1.0')
        class Versioned:
            pass
        assert Versioned.__processor_version__ == '2.1.0'

    def test_warns_for_undecorated_concrete_class(self):
        class Unversioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            Unversioned()
            Unversioned()
        messages = [w for w in caught if 'processor version' in str(w.message)]
        assert len(messages) == 1

    def test_library_processors_declare_versions(self):
        for cls in (PauliDecomposition, FreemanDurdenDecomposition,
                    PolarimetricBoxcarFilter, ToDecibels):
            assert cls.__processor_version__ == '1.0.0'


class TestProcessorTags:

    def test_stamps_tags(self):
        @processor_tags(modalities=[ImageModality.POLSAR],
                        category=ProcessorCategory.DECOMPOSITION,
                        description='test')
        class Tagged:
            pass
        tags = Tagged.__processor_tags__
        assert tags['modalities'] == (ImageModality.POLSAR,)
        assert tags['category'] is ProcessorCategory.DECOMPOSITION

    def test_rejects_string_category(self):
        with pytest.raises(TypeError):
            processor_tags(category='decomposition')

    def test_decomposition_tags(self):
        tags = PauliDecomposition.__processor_tags__
        assert tags['category'] is ProcessorCategory.DECOMPOSITION


# ---------------------------------------------------------------------------
# Global pass
# ---------------------------------------------------------------------------

class TestGlobalProcessor:

    def test_sets_flag(self):
        @globalprocessor
        def method(self, source):
            pass
        assert method.__is_global_callback__ is True

    def test_collected_and_inherited(self):
        @processor_version('0.0.1')
        class Base(ImageTransform):
            @globalprocessor
            def first(self, source):
                pass

            def apply(self, source, **kwargs):
                return source

        class Child(Base):
            @globalprocessor
            def second(self, source):
                pass

        assert Base.__global_callbacks__ == ('first',)
        assert Child.__global_callbacks__ == ('first', 'second')
        assert Child.__has_global_pass__

    def test_plain_processor_has_no_global_pass(self):
        assert not ToDecibels.__has_global_pass__
        assert not ToDecibels().has_global_pass

    def test_power_decomposition_global_pass_follows_normalize(self):
        assert PauliDecomposition.__global_callbacks__ == ('span_extent',)
        assert not PauliDecomposition().has_global_pass
        assert PauliDecomposition(normalize=True).has_global_pass
