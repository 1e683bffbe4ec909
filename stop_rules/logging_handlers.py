import logging
import os
import sys
from typing import List, Optional, Tuple

import config


def _configured_outputs(debug: bool) -> Tuple[str, str]:
    if debug:
        return (getattr(config, "DEBUG_LOG_OUTPUTS", config.LOG_OUTPUTS),
                getattr(config, "DEBUG_LOG_FILE_PATH", config.LOG_FILE_PATH))
    return config.LOG_OUTPUTS, config.LOG_FILE_PATH


def build_handlers(verbose: bool = True, debug: bool = False,
                   outputs: Optional[str] = None,
                   log_file_path: Optional[str] = None) -> List[logging.Handler]:
    """
    Build log handlers from a comma separated output list (stdout, stderr, file).

    Unset arguments fall back to config; unknown names fall back to stdout.
    """
    if not verbose:
        return []

    default_outputs, default_path = _configured_outputs(debug)
    outputs = outputs if outputs is not None else default_outputs
    log_file_path = log_file_path or default_path

    handlers: List[logging.Handler] = []
    for part in {p.strip().lower(): None for p in outputs.split(",") if p.strip()}:
        if part == "stdout":
            handlers.append(logging.StreamHandler(sys.stdout))
        elif part == "stderr":
            handlers.append(logging.StreamHandler(sys.stderr))
        elif part == "file":
            log_dir = os.path.dirname(log_file_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(log_file_path))

    if not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    return handlers
