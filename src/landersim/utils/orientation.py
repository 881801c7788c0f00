"""
Orientation utilities for the lander body frame.

Lander orientation is stored as xyz Euler angles in degrees. The engine
fires along the body +Z axis, so "up" for the lander is body +Z and the
heat-shield base faces body -Z.

Examples
--------
>>> from landersim.utils.orientation import body_to_world, orientation_from_direction
>>> euler = orientation_from_direction(toward=[1, 0, 0])
>>> np.round(body_to_world(euler, [0, 0, 1]), 6)
array([1., 0., 0.])
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.transform import Rotation as R

# Euler angle sequence used throughout the package
EULER_SEQUENCE = "xyz"
SMALL_NUM = 1e-6


def rotation_from_euler(orientation: NDArray[np.float64] | list[float]) -> R:
    """Rotation body -> world for xyz Euler angles in degrees."""
    return R.from_euler(EULER_SEQUENCE, np.asarray(orientation, dtype=np.float64), degrees=True)


def body_to_world(
    orientation: NDArray[np.float64] | list[float],
    v_body: NDArray[np.float64] | list[float],
) -> NDArray[np.float64]:
    """
    Express a body-frame vector in world coordinates.

    Parameters
    ----------
    orientation : array-like
        xyz Euler angles [degrees] (3,)
    v_body : array-like
        Vector in the lander body frame (3,)

    Returns
    -------
    NDArray[np.float64]
        Vector in world frame (3,)
    """
    return rotation_from_euler(orientation).apply(np.asarray(v_body, dtype=np.float64))


def orientation_from_direction(
    toward: tuple[float, float, float] | list[float] | NDArray,
) -> NDArray[np.float64]:
    """
    Euler angles that point the body +Z axis along ``toward``.

    Builds an orthonormal frame (out, left, up) with ``up`` the target
    direction and ``out`` (body +X) kept in the world XY plane, then
    decomposes it into xyz Euler angles. A horizontal body +X keeps the
    middle angle at 0, away from the gimbal-lock pitch of ±90°.

    Parameters
    ----------
    toward : array-like
        Target direction in world frame. Will be normalized.

    Returns
    -------
    NDArray[np.float64]
        xyz Euler angles [degrees] (3,)

    Raises
    ------
    ValueError
        If ``toward`` has zero length
    """
    up = np.asarray(toward, dtype=np.float64)
    n = np.linalg.norm(up)
    if n < SMALL_NUM:
        raise ValueError("Cannot orient along a zero-length direction")
    up = up / n

    out = np.cross(up, [0.0, 0.0, 1.0])
    if np.linalg.norm(out) < SMALL_NUM:
        # up is along world Z
        out = np.array([1.0, 0.0, 0.0])
    out = out / np.linalg.norm(out)
    left = np.cross(up, out)

    # Columns are the body axes expressed in world coordinates
    R_mat = np.column_stack([out, left, up])
    return R.from_matrix(R_mat).as_euler(EULER_SEQUENCE, degrees=True)
