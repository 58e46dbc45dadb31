"""Tests for the miner adapters."""

from pathlib import Path

import pytest

from grosso import ItemsetSequence
from grosso.exceptions import InvalidDataError, MiningError
from grosso.miners import FunctionMiner, SpmfMiner, parse_mined_patterns

from conftest import write_lines


class TestParseMinedPatterns:

    def test_parse(self, tmp_path):
        path = write_lines(tmp_path / 'mined.txt', [
            "1 -1 #SUP: 8",
            "1 -1 2 -1 #SUP: 3",
            "4 5 -1 #SUP: 2",
        ])
        patterns = parse_mined_patterns(path)
        assert patterns == {
            ItemsetSequence([[1]]): 8,
            ItemsetSequence([[1], [2]]): 3,
            ItemsetSequence([[4, 5]]): 2,
        }
        assert list(patterns) == [ItemsetSequence([[1]]), ItemsetSequence([[1], [2]]), ItemsetSequence([[4, 5]])]

    def test_malformed_lines_are_skipped(self, tmp_path):
        path = write_lines(tmp_path / 'mined.txt', [
            "1 -1 #SUP: 8",
            "1 -1",
            "2 -1 #SUP: many",
            "x -1 #SUP: 3",
            "",
            "3 -1 #SUP: 1",
        ])
        assert parse_mined_patterns(path) == {ItemsetSequence([[1]]): 8, ItemsetSequence([[3]]): 1}

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidDataError):
            parse_mined_patterns(tmp_path / 'nothing.txt')


class TestFunctionMiner:

    def test_wraps_callable(self, tmp_path):
        output = write_lines(tmp_path / 'out.txt', ["1 -1 #SUP: 1"])
        miner = FunctionMiner(lambda input_file, min_frequency: str(output))
        assert miner.mine(tmp_path / 'in.txt', 0.5) == output

    def test_output_path_is_passed_on(self, tmp_path):
        calls = []

        def mine(input_file, min_frequency, output_file):
            calls.append(output_file)
            return write_lines(Path(output_file), ["1 -1 #SUP: 1"])

        output = tmp_path / "scratch" / "out.txt"
        output.parent.mkdir()
        assert FunctionMiner(mine).mine(tmp_path / "in.txt", 0.5, output) == output
        assert calls == [str(output)]

    def test_two_argument_callable_keeps_its_own_path(self, tmp_path):
        output = write_lines(tmp_path / "own.txt", ["1 -1 #SUP: 1"])
        miner = FunctionMiner(lambda input_file, min_frequency: str(output))
        assert not miner.accepts_output
        assert miner.mine(tmp_path / "in.txt", 0.5, tmp_path / "unused.txt") == output

    def test_failure_becomes_mining_error(self):
        def broken(input_file, min_frequency):
            raise RuntimeError("out of memory")

        with pytest.raises(MiningError, match="out of memory"):
            FunctionMiner(broken).mine('in.txt', 0.5)

    def test_no_output(self):
        with pytest.raises(MiningError):
            FunctionMiner(lambda input_file, min_frequency: None).mine('in.txt', 0.5)

    def test_not_callable(self):
        with pytest.raises(MiningError):
            FunctionMiner("prefixspan")


class TestSpmfMiner:

    def test_defaults(self):
        miner = SpmfMiner(spmf_path='/opt/spmf')
        assert miner.algorithm == 'PrefixSpan'
        assert miner.spmf_path == '/opt/spmf'
        assert repr(miner) == "SpmfMiner(algorithm='PrefixSpan')"
