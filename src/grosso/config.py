"""Configuration management for the grosso package."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging


def _env_flag(name: str) -> bool:
    return os.getenv(name, '').lower() in ('1', 'true', 'yes')


@dataclass
class GrossoConfig:
    """Configuration for temporal sequential pattern mining.

    Attributes:
        verbose: Enable verbose output
        suppress_prints: Suppress all print statements
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        n_jobs: Default number of parallel jobs (-1 for all cores)
        spmf_path: Directory holding spmf.jar (None uses the wrapper's default)
        keep_mined_files: Keep the miner's output files after seeding
        work_dir: Directory for mined files (a temporary one when None)
    """

    verbose: bool = False
    suppress_prints: bool = True
    log_level: str = "WARNING"
    n_jobs: int = 1
    spmf_path: Optional[str] = None
    keep_mined_files: bool = False
    work_dir: Optional[Path] = None

    def __post_init__(self):
        """Initialize configuration from environment variables."""
        if os.getenv('GROSSO_VERBOSE'):
            self.verbose = _env_flag('GROSSO_VERBOSE')

        if os.getenv('GROSSO_LOG_LEVEL'):
            self.log_level = os.getenv('GROSSO_LOG_LEVEL', 'WARNING')

        if os.getenv('GROSSO_N_JOBS'):
            self.n_jobs = int(os.getenv('GROSSO_N_JOBS', '1'))

        if os.getenv('GROSSO_KEEP_MINED'):
            self.keep_mined_files = _env_flag('GROSSO_KEEP_MINED')

        if os.getenv('GROSSO_WORK_DIR'):
            self.work_dir = Path(os.getenv('GROSSO_WORK_DIR'))

        if os.getenv('SPMF_PATH'):
            self.spmf_path = os.getenv('SPMF_PATH')

        if self.work_dir is not None:
            self.work_dir = Path(self.work_dir)

    def setup_logging(self):
        """Configure logging based on settings."""
        log_level = getattr(logging, self.log_level.upper(), logging.WARNING)
        logging.basicConfig(
            level=log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )


# Global configuration instance
config = GrossoConfig()
