"""Tests for the grosso-mine command line."""

import pytest

from grosso import EmergingPatterns
from grosso.cli import _algorithm_params, _build_parser, main
from grosso.config import config

from conftest import write_lines


def run(argv):
    with pytest.raises(SystemExit) as info:
        main(argv)
    return info.value.code


class TestCli:

    def test_list(self, capsys):
        assert run(['--list']) == 0
        out = capsys.readouterr().out
        for name in ('stable', 'emerging', 'descending', 'sp-freq', 'ep-freq', 'dp-freq'):
            assert f"- {name}" in out

    def test_version(self, capsys):
        assert run(['--version']) == 0
        assert capsys.readouterr().out.startswith("grosso version")

    def test_compare_capacities(self, tmp_path, capsys):
        path = write_lines(tmp_path / 'd.txt', ["1 2 -1 1 -1 -2", "1 -1 -2"])
        assert run(['--compare-capacities', str(path)]) == 0
        out = capsys.readouterr().out
        assert "d.txt" in out
        assert "Delta_no" in out

    def test_missing_dataset(self, tmp_path, capsys):
        assert run(['emerging', str(tmp_path / 'missing.txt')]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_unknown_algorithm(self, tmp_path, capsys):
        path = write_lines(tmp_path / 'd.txt', ["1 -1 -2"])
        assert run(['gradual', str(path), str(path)]) == 1
        assert "Unknown algorithm" in capsys.readouterr().err

    def test_algorithm_required(self):
        assert run([]) == 2

    def test_n_jobs_defaults_to_config(self, monkeypatch):
        monkeypatch.setattr(config, 'n_jobs', 3)
        params = _algorithm_params(_build_parser().parse_args(['emerging', 'q1.txt', 'q2.txt']))
        assert 'n_jobs' not in params
        assert EmergingPatterns(**params).n_jobs == 3

    def test_n_jobs_option_overrides_config(self, monkeypatch):
        monkeypatch.setattr(config, 'n_jobs', 3)
        params = _algorithm_params(_build_parser().parse_args(['emerging', 'q1.txt', '-j', '2']))
        assert EmergingPatterns(**params).n_jobs == 2
