# physics_utils.py

import numpy as np

class PhysicsError(Exception):
    """Custom exception for structurally invalid physics inputs (e.g. a vector of the wrong shape)."""
    pass

def normalize_degrees(angle_deg):
    """
    Wraps an angle (or array of angles) into the range [0, 360).

    Args:
        angle_deg (float or np.ndarray): Angle(s) in degrees, any real value.

    Returns:
        float or np.ndarray: The equivalent angle(s) in [0, 360).
    """
    wrapped = np.mod(angle_deg, 360.0)
    # np.mod can return exactly 360.0 for tiny negative inputs
    if isinstance(wrapped, np.ndarray):
        wrapped[wrapped >= 360.0] = 0.0
        return wrapped
    wrapped = float(wrapped)
    return 0.0 if wrapped >= 360.0 else wrapped

def as_vector3(value) -> np.ndarray:
    """
    Converts a sequence or array to a float64 3-vector.

    Raises:
        PhysicsError: If the value does not hold exactly three finite components.
    """
    vector = np.asarray(value, dtype=np.float64)
    if vector.shape != (3,):
        raise PhysicsError(f"Expected a 3-component vector, got shape {vector.shape}: {value!r}")
    if not np.all(np.isfinite(vector)):
        raise PhysicsError(f"Vector components must be finite: {value!r}")
    return vector

def normalize_vector(vector, epsilon=1e-12):
    """
    Normalizes a vector to unit length.

    Args:
        vector (np.ndarray): The vector to normalize.
        epsilon (float): Threshold below which the vector's magnitude is considered zero.

    Returns:
        np.ndarray: The unit vector, or a zero vector of the same shape when the
                    magnitude is below epsilon.
    """
    vector = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(vector)
    if norm < epsilon:
        return np.zeros_like(vector)
    return vector / norm

def angle_between_deg(first, second, epsilon=1e-12) -> float:
    """
    Angle between two vectors in degrees, in [0, 180].

    Degenerate (near-zero) vectors give 0.0 instead of NaN. The cosine is
    clamped to [-1, 1] so round-off never leaves the domain of arccos.
    """
    unit_first = normalize_vector(first, epsilon)
    unit_second = normalize_vector(second, epsilon)
    if not unit_first.any() or not unit_second.any():
        return 0.0
    cos_angle = np.clip(np.dot(unit_first, unit_second), -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_angle)))

def rotation_matrix_z(angle_rad: float) -> np.ndarray:
    """Right-handed rotation about the +Z axis."""
    c, s = np.cos(angle_rad), np.sin(angle_rad)
    return np.array([[c, -s, 0.0],
                     [s, c, 0.0],
                     [0.0, 0.0, 1.0]], dtype=np.float64)

def rotation_matrix_x(angle_rad: float) -> np.ndarray:
    """Right-handed rotation about the +X axis."""
    c, s = np.cos(angle_rad), np.sin(angle_rad)
    return np.array([[1.0, 0.0, 0.0],
                     [0.0, c, -s],
                     [0.0, s, c]], dtype=np.float64)
