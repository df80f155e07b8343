"""Error taxonomy for the imbalance sweep."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ImbsweepError",
    "InvalidParameter",
    "ConfigOutOfRange",
    "InsufficientPool",
    "FitError",
]


def _where(config_index: Optional[int], iteration: Optional[int]) -> str:
    parts = []
    if config_index is not None:
        parts.append(f"config_index={config_index}")
    if iteration is not None:
        parts.append(f"iteration={iteration}")
    return f" [{', '.join(parts)}]" if parts else ""


class ImbsweepError(Exception):
    """Base class for every error raised by imbsweep."""


class InvalidParameter(ImbsweepError, ValueError):
    """Bad synthesis or sweep inputs; raised before any sampling happens."""


class _LocatedError(ImbsweepError):
    """Error that names the configuration (and iteration) it happened in."""

    def __init__(
        self,
        detail: str,
        config_index: Optional[int] = None,
        iteration: Optional[int] = None,
    ) -> None:
        self.detail = detail
        self.config_index = config_index
        self.iteration = iteration
        super().__init__(detail + _where(config_index, iteration))

    def __reduce__(self):
        # joblib workers send exceptions back pickled.
        return (type(self), (self.detail, self.config_index, self.iteration))


class ConfigOutOfRange(_LocatedError, ValueError):
    """A planned window has a negative size or more test rows than held-out rows."""


class InsufficientPool(_LocatedError, ValueError):
    """A group pool cannot supply the requested train/test draw."""


class FitError(_LocatedError, RuntimeError):
    """The classifier raised while fitting or scoring one iteration."""
