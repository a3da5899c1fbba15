# -*- coding: utf-8 -*-
"""
Tests for grpol.config - processing options and YAML loading.

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
2026-02-28

Modified
--------
2026-03-06
"""

import pytest

from grpol.config import CalibrationConfig, ProcessingConfig, load_config
from grpol.exceptions import ConfigurationError
from grpol.vocabulary import CalibrationMode, IncidenceAngleSource


class TestProcessingConfig:
    def test_defaults(self):
        cfg = ProcessingConfig()
        assert cfg.algorithm == 'pauli'
        assert cfg.window_size == 5
        assert cfg.tile_size == 512
        assert cfg.workers is None
        assert cfg.calibration.mode is CalibrationMode.SIGMA0

    def test_algorithm_normalised(self):
        assert ProcessingConfig(algorithm=' Freeman-Durden ').algorithm == 'freeman-durden'

    def test_unknown_algorithm(self):
        with pytest.raises(ConfigurationError, match='Unrecognised algorithm'):
            ProcessingConfig(algorithm='krogager')

    @pytest.mark.parametrize('size', [0, 4, -3, 2.0, True])
    def test_bad_window(self, size):
        with pytest.raises(ConfigurationError, match='window_size'):
            ProcessingConfig(window_size=size)

    def test_target_matrix_normalised(self):
        assert ProcessingConfig(target_matrix='c4').target_matrix == 'C4'

    def test_target_matrix_raw_rejected(self):
        with pytest.raises(ConfigurationError):
            ProcessingConfig(target_matrix='FULL')

    def test_bad_plane(self):
        with pytest.raises(ConfigurationError, match='h_alpha_plane'):
            ProcessingConfig(h_alpha_plane='wishart')

    def test_bad_workers(self):
        with pytest.raises(ConfigurationError, match='workers'):
            ProcessingConfig(workers=0)

    def test_normalize_must_be_bool(self):
        with pytest.raises(ConfigurationError, match='normalize'):
            ProcessingConfig(normalize='yes')


class TestFromDict:
    def test_none_gives_defaults(self):
        assert ProcessingConfig.from_dict(None) == ProcessingConfig()

    def test_nested_calibration(self):
        cfg = ProcessingConfig.from_dict({
            'algorithm': 'calibration',
            'calibration': {'mode': 'gamma0', 'incidence_angle_source': 'DEM'},
        })
        assert isinstance(cfg.calibration, CalibrationConfig)
        assert cfg.calibration.mode is CalibrationMode.GAMMA0
        assert cfg.calibration.incidence_angle_source is IncidenceAngleSource.DEM

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match='window'):
            ProcessingConfig.from_dict({'window': 5})

    def test_unknown_calibration_key(self):
        with pytest.raises(ConfigurationError, match='CalibrationConfig'):
            ProcessingConfig.from_dict({'calibration': {'lut': 'lutSigma'}})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match='mapping'):
            ProcessingConfig.from_dict(['pauli'])

    def test_bad_calibration_mode(self):
        with pytest.raises(ConfigurationError, match='calibration mode'):
            CalibrationConfig(mode='sigma1')


class TestLoadConfig:
    def test_yaml(self, tmp_path):
        path = tmp_path / 'run.yaml'
        path.write_text(
            "algorithm: yamaguchi\n"
            "window_size: 7\n"
            "normalize: true\n"
            "tile_size: 256\n"
            "workers: 2\n"
        )
        cfg = load_config(path)
        assert cfg.algorithm == 'yamaguchi'
        assert cfg.window_size == 7
        assert cfg.normalize is True
        assert cfg.tile_size == 256
        assert cfg.workers == 2

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        assert load_config(str(path)) == ProcessingConfig()

    def test_invalid_value(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text("algorithm: cloude-pottier\nh_alpha_plane: other\n")
        with pytest.raises(ConfigurationError):
            load_config(path)
