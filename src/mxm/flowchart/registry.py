"""
Sample registry for mxm-flowchart.

This module exposes a minimal, in-process catalogue of flowchart sources used
by the CLI. It is built lazily on first use and cached; the cached values are
plain strings, so sharing them across callers is safe.
"""

from __future__ import annotations

__all__ = ["get_sample", "get_samples"]

# Internal lazy cache of sample sources.
_cache: dict[str, str] | None = None


def get_samples() -> dict[str, str]:
    """
    Return the available samples.

    Returns
    -------
    Dict[str, str]
        Mapping of sample-name -> flowchart source. Keys are lowercase.
    """
    global _cache
    if _cache is None:
        from .demos.samples import build_samples

        _cache = {k.lower(): v for k, v in build_samples().items()}
    return dict(_cache)


def get_sample(name: str) -> str:
    """
    Retrieve a single sample by name (case-insensitive).

    Raises
    ------
    KeyError
        If the requested sample is not present in the registry.
    """
    samples = get_samples()
    key = name.strip().lower()
    if key not in samples:
        raise KeyError(f"Unknown sample: {name}")
    return samples[key]
