"""SPMF miner driven through the spmf wrapper."""
import logging
from pathlib import Path
from typing import Optional

from .base import BaseSequenceMiner
from ..config import config
from ..exceptions import MiningError

logger = logging.getLogger(__name__)


class SpmfMiner(BaseSequenceMiner):
    """Run a SPMF sequential pattern mining algorithm.

    Args:
        algorithm: SPMF algorithm name (default PrefixSpan)
        spmf_path: Directory containing spmf.jar (default: config.spmf_path)

    Example:
        >>> miner = SpmfMiner(spmf_path='/opt/spmf')
        >>> output = miner.mine('2005q4_SPMF.txt', 0.12)
    """

    def __init__(self, algorithm: str = 'PrefixSpan', spmf_path: Optional[str] = None):
        self.algorithm = algorithm
        self.spmf_path = spmf_path or config.spmf_path

    def mine(self, input_file, min_frequency, output_file=None) -> Path:
        output_file = Path(output_file) if output_file else self._default_output(input_file)

        try:
            from spmf import Spmf
        except ImportError as e:
            raise MiningError("SPMF library not available. Install with: pip install spmf") from e

        options = {}
        if self.spmf_path:
            options['spmf_bin_location_dir'] = self.spmf_path

        logger.info(f"Running SPMF {self.algorithm} on {input_file} at min frequency {min_frequency:.6f}")
        try:
            spmf = Spmf(
                self.algorithm,
                input_filename=str(input_file),
                output_filename=str(output_file),
                arguments=[min_frequency],
                **options
            )
            spmf.run()
        except Exception as e:
            raise MiningError(f"SPMF execution failed: {e}") from e

        if not output_file.exists():
            raise MiningError(f"SPMF produced no output file {output_file}")

        logger.debug("SPMF sequential pattern mining completed")
        return output_file

    def __repr__(self) -> str:
        return f"SpmfMiner(algorithm='{self.algorithm}')"
