# datatips/caching.py

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, Optional

from joblib import Memory

from .settings import settings


def cached(
    function: Callable,
    location: Optional[Path] = None,
    verbose: int = 0,
) -> Callable:
    """
    Memoize `function` on disk with joblib.Memory.

    Calls with arguments seen before return the stored result without
    running the body. Results survive the process, so a rerun of a slow
    analysis script picks them up. Use `.clear()` on the returned wrapper
    to drop them.
    """
    location = Path(location) if location is not None else settings.cache_dir
    location.mkdir(parents=True, exist_ok=True)

    memory = Memory(location=str(location), verbose=verbose)
    return memory.cache(function)


def clear_cache(location: Optional[Path] = None) -> None:
    location = Path(location) if location is not None else settings.cache_dir
    if location.exists():
        shutil.rmtree(location)
