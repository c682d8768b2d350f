from dataclasses import dataclass
from typing import Optional


@dataclass
class OptimizerConfig:
    merge_segments: bool = True
    strict: bool = False     # unreachable segment walks raise instead of degrading
    verify: bool = True      # replay each result and keep the input if it fails
    log_file: Optional[str] = None
    verbose: bool = False
