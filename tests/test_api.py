"""Tests for the registry, the main interface, configuration and errors."""

import functools

import pytest

import grosso
from grosso import (
    AlgorithmRegistry,
    DescendingPatterns,
    EmergingPatterns,
    StablePatterns,
    TemporalPatternMiner,
)
from grosso.config import GrossoConfig, config
from grosso.exceptions import (
    GrossoError,
    InvalidAlgorithmError,
    InvalidDataError,
    InvalidParameterError,
    MalformedTransactionError,
    MiningError,
    NotFittedError,
    PreconditionError,
)

from conftest import candidate_miner


class TestAlgorithmRegistry:

    @pytest.mark.parametrize("name,cls", [
        ('stable', StablePatterns), ('SP', StablePatterns),
        ('emerging', EmergingPatterns), ('ep', EmergingPatterns),
        ('descending', DescendingPatterns), ('dp', DescendingPatterns),
    ])
    def test_get(self, name, cls):
        assert AlgorithmRegistry.get(name) is cls

    @pytest.mark.parametrize("name", ['sp-freq', 'ep-freq', 'dp-freq'])
    def test_frequency_baselines(self, name):
        factory = AlgorithmRegistry.get(name)
        assert isinstance(factory, functools.partial)
        assert factory().use_bounds is False

    def test_unknown(self):
        with pytest.raises(InvalidAlgorithmError):
            AlgorithmRegistry.get('graank')

    def test_register(self):
        class CustomPatterns(EmergingPatterns):
            pass

        AlgorithmRegistry.register('custom-test', CustomPatterns)
        try:
            assert AlgorithmRegistry.has_algorithm('CUSTOM-TEST')
        finally:
            AlgorithmRegistry._algorithms.pop('custom-test')

    def test_register_rejects_other_classes(self):
        with pytest.raises(ValueError):
            AlgorithmRegistry.register('bad', dict)

    def test_list_algorithms(self):
        assert grosso.list_algorithms() == AlgorithmRegistry.list_algorithms()


class TestTemporalPatternMiner:

    def test_mine(self, quarter_files):
        miner = TemporalPatternMiner('ep-freq', quarter_files[:2], epsilon=0.1, miner=candidate_miner())
        patterns = miner.mine()
        assert [p.to_string() for p in patterns] == ['1 -1', '1 -1 2 -1']
        assert miner.get_result().dataset_sizes == [10, 10]

    def test_datasets_in_mine(self, quarter_files):
        miner = TemporalPatternMiner('sp-freq', theta=0.3, miner=candidate_miner())
        result = miner.mine_and_get_result([quarter_files[0], quarter_files[2]])
        assert [p.to_string() for p in result] == ['2 -1']

    def test_no_datasets(self):
        with pytest.raises(ValueError):
            TemporalPatternMiner('stable').mine()

    def test_get_before_mine(self):
        with pytest.raises(NotFittedError):
            TemporalPatternMiner('stable').get_patterns()


class TestConfig:

    def test_defaults(self, monkeypatch):
        for name in ('GROSSO_VERBOSE', 'GROSSO_LOG_LEVEL', 'GROSSO_N_JOBS',
                     'GROSSO_KEEP_MINED', 'GROSSO_WORK_DIR', 'SPMF_PATH'):
            monkeypatch.delenv(name, raising=False)
        cfg = GrossoConfig()
        assert cfg.n_jobs == 1
        assert cfg.keep_mined_files is False
        assert cfg.work_dir is None

    def test_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv('GROSSO_N_JOBS', '4')
        monkeypatch.setenv('GROSSO_KEEP_MINED', 'true')
        monkeypatch.setenv('GROSSO_WORK_DIR', str(tmp_path))
        monkeypatch.setenv('SPMF_PATH', '/opt/spmf')
        cfg = GrossoConfig()
        assert cfg.n_jobs == 4
        assert cfg.keep_mined_files is True
        assert cfg.work_dir == tmp_path
        assert cfg.spmf_path == '/opt/spmf'

    def test_kept_mined_files(self, monkeypatch, quarter_files, tmp_path):
        work_dir = tmp_path / 'work'
        monkeypatch.setattr(config, 'keep_mined_files', True)
        monkeypatch.setattr(config, 'work_dir', work_dir)
        EmergingPatterns(epsilon=0.1, use_bounds=False, miner=candidate_miner()).fit(quarter_files[:2])
        assert len(list(work_dir.iterdir())) == 1


class TestExceptions:

    @pytest.mark.parametrize("exc", [
        InvalidDataError, MalformedTransactionError, InvalidAlgorithmError,
        InvalidParameterError, PreconditionError, MiningError, NotFittedError,
    ])
    def test_hierarchy(self, exc):
        assert issubclass(exc, GrossoError)

    def test_malformed_is_invalid_data(self):
        assert issubclass(MalformedTransactionError, InvalidDataError)
