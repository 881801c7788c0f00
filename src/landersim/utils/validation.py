"""
Validation utilities for physical parameters and state variables.

Provides functions to validate inputs for the lander simulation,
rejecting invalid configuration before any state is mutated.
"""
from __future__ import annotations
import numpy as np
from numpy.typing import NDArray
import warnings


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise ValueError. If False, issue warning.

    Raises
    ------
    ValueError
        If strict=True and value <= 0
    """
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        if strict:
            raise ValueError(msg)
        else:
            warnings.warn(msg, RuntimeWarning, stacklevel=2)


def validate_vector3(v: NDArray[np.float64], name: str) -> NDArray[np.float64]:
    """
    Validate and convert a 3-vector.

    Parameters
    ----------
    v : array-like
        Vector to validate
    name : str
        Parameter name for error messages

    Returns
    -------
    NDArray[np.float64]
        Copy of ``v`` as a float64 array of shape (3,)

    Raises
    ------
    ValueError
        If shape is not (3,) or any component is not finite
    """
    arr = np.array(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite, got {arr}")
    return arr


def validate_timestep(dt: float, max_dt: float = 1.0) -> None:
    """
    Validate timestep is positive and reasonable.

    Parameters
    ----------
    dt : float
        Time step [s]
    max_dt : float
        Maximum reasonable timestep [s]

    Raises
    ------
    ValueError
        If timestep is invalid
    """
    if dt <= 0:
        raise ValueError(f"Timestep must be positive, got {dt}")
    if dt > max_dt:
        warnings.warn(
            f"Large timestep {dt}s may cause instability. "
            f"Consider using dt < {max_dt}s.",
            RuntimeWarning,
            stacklevel=2
        )
