"""Parsing of result files."""
from typing import List, Tuple
from ..core.data_structures import ItemsetSequence
from ..exceptions import MalformedTransactionError

FREQUENCY_PREFIX = 'freq_'


def parse_result_line(line: str) -> Tuple[ItemsetSequence, List[float]]:
    """Parse one line of a result file.

    Args:
        line: ``<pattern> freq_1: <v1> freq_2: <v2> ...``

    Returns:
        The pattern and its frequencies (-1.0 for unevaluated datasets)

    Raises:
        MalformedTransactionError: If the line cannot be parsed
    """
    head, marker, tail = line.partition(f"{FREQUENCY_PREFIX}1:")
    if not marker:
        return ItemsetSequence.from_string(line), []

    frequencies = []
    for token in tail.split():
        if token.startswith(FREQUENCY_PREFIX):
            continue
        try:
            frequencies.append(float(token))
        except ValueError:
            raise MalformedTransactionError(f"Invalid frequency '{token}'", line=line)

    return ItemsetSequence.from_string(head), frequencies
