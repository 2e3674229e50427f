"""NumPy-backed math utilities: Vec3 and Quaternion operations.

Vectors are plain numpy arrays; quaternions are [x, y, z, w] arrays.
World space is Y-up, and lights shine along their local +Z axis.
"""

import numpy as np
from numpy.typing import NDArray

# Type aliases
Vec3 = NDArray[np.float64]
Mat3 = NDArray[np.float64]
Quat = NDArray[np.float64]  # [x, y, z, w]

FORWARD = np.array([0.0, 0.0, 1.0], dtype=np.float64)
UP = np.array([0.0, 1.0, 0.0], dtype=np.float64)
DOWN = np.array([0.0, -1.0, 0.0], dtype=np.float64)


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3:
    return np.array([x, y, z], dtype=np.float64)


# Quaternion operations

def quat_identity() -> Quat:
    return np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)


def quat_from_euler(x: float, y: float, z: float, order: str = "XYZ") -> Quat:
    """Create quaternion from Euler angles (radians).

    ``"YXZ"`` matches the engine convention where a rotation of
    (pitch, yaw, roll) applies roll, then pitch, then yaw.
    """
    cx, sx = np.cos(x / 2), np.sin(x / 2)
    cy, sy = np.cos(y / 2), np.sin(y / 2)
    cz, sz = np.cos(z / 2), np.sin(z / 2)

    if order == "XYZ":
        return np.array([
            sx * cy * cz + cx * sy * sz,
            cx * sy * cz - sx * cy * sz,
            cx * cy * sz + sx * sy * cz,
            cx * cy * cz - sx * sy * sz,
        ], dtype=np.float64)
    elif order == "YXZ":
        return np.array([
            sx * cy * cz + cx * sy * sz,
            cx * sy * cz - sx * cy * sz,
            cx * cy * sz - sx * sy * cz,
            cx * cy * cz + sx * sy * sz,
        ], dtype=np.float64)
    else:
        raise ValueError(f"Unsupported Euler order: {order}")


def quat_normalize(q: Quat) -> Quat:
    n = np.linalg.norm(q)
    if n < 1e-10:
        return quat_identity()
    return q / n


def quat_rotate_vec3(q: Quat, v: Vec3) -> Vec3:
    """Rotate a vector by a quaternion."""
    qv = q[:3]
    w = q[3]
    t = 2.0 * np.cross(qv, v)
    return v + w * t + np.cross(qv, t)


def mat3_to_quat(R: Mat3) -> Quat:
    """Convert a 3x3 rotation matrix to a quaternion [x, y, z, w].

    Uses Shepperd's method, branching on the largest diagonal term.
    """
    trace = R[0, 0] + R[1, 1] + R[2, 2]
    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        q = [
            (R[2, 1] - R[1, 2]) * s,
            (R[0, 2] - R[2, 0]) * s,
            (R[1, 0] - R[0, 1]) * s,
            0.25 / s,
        ]
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        q = [
            0.25 * s,
            (R[0, 1] + R[1, 0]) / s,
            (R[0, 2] + R[2, 0]) / s,
            (R[2, 1] - R[1, 2]) / s,
        ]
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        q = [
            (R[0, 1] + R[1, 0]) / s,
            0.25 * s,
            (R[1, 2] + R[2, 1]) / s,
            (R[0, 2] - R[2, 0]) / s,
        ]
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        q = [
            (R[0, 2] + R[2, 0]) / s,
            (R[1, 2] + R[2, 1]) / s,
            0.25 * s,
            (R[1, 0] - R[0, 1]) / s,
        ]
    return quat_normalize(np.array(q, dtype=np.float64))


def quat_look_rotation(forward: Vec3, up: Vec3 = UP) -> Quat:
    """Rotation that maps local +Z onto *forward* with +Y as close to *up* as possible."""
    f = normalize(forward)
    if np.linalg.norm(f) < 1e-10:
        return quat_identity()
    r = normalize(np.cross(up, f))
    # Degenerate case: forward is parallel to up (e.g. aiming straight down).
    # Fall back to an alternative up vector.
    if np.linalg.norm(r) < 1e-6:
        alt_up = np.array([0.0, 0.0, 1.0]) if abs(f[1]) > 0.9 else UP
        r = normalize(np.cross(alt_up, f))
    u = np.cross(f, r)
    R = np.column_stack([r, u, f])
    return mat3_to_quat(R)


# Vector operations

def normalize(v: Vec3) -> Vec3:
    n = np.linalg.norm(v)
    if n < 1e-10:
        return np.zeros_like(v)
    return v / n


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def deg_to_rad(degrees: float) -> float:
    return degrees * np.pi / 180.0
