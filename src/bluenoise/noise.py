import numpy as np

_MASK32 = np.uint64(0xFFFFFFFF)


def quintic(t):
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lattice_hash(ix, iy, seed=0):
    """32-bit integer hash of lattice coordinates."""
    with np.errstate(over="ignore"):
        return _mix(ix, iy, seed)


def _mix(ix, iy, seed):
    h = (np.asarray(ix).astype(np.uint64) * np.uint64(0x27D4EB2D)
         ^ np.asarray(iy).astype(np.uint64) * np.uint64(0x165667B1)
         ^ np.uint64(seed) * np.uint64(0x9E3779B1)) & _MASK32
    h = ((h ^ (h >> np.uint64(15))) * np.uint64(0x2C1B3C6D)) & _MASK32
    h = ((h ^ (h >> np.uint64(12))) * np.uint64(0x297A2D39)) & _MASK32
    return h ^ (h >> np.uint64(15))


def _corner(ix, iy, dx, dy, seed):
    theta = lattice_hash(ix, iy, seed).astype(np.float64) * (2.0 * np.pi / 2**32)
    return np.cos(theta) * dx + np.sin(theta) * dy


def gradient_noise2d(x, y, seed=0):
    """Gradient noise, zero on lattice points, roughly within [-0.7, 0.7]."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    fx0 = np.floor(x)
    fy0 = np.floor(y)
    ix = fx0.astype(np.int64)
    iy = fy0.astype(np.int64)
    tx = x - fx0
    ty = y - fy0

    n00 = _corner(ix, iy, tx, ty, seed)
    n10 = _corner(ix + 1, iy, tx - 1.0, ty, seed)
    n01 = _corner(ix, iy + 1, tx, ty - 1.0, seed)
    n11 = _corner(ix + 1, iy + 1, tx - 1.0, ty - 1.0, seed)

    u = quintic(tx)
    v = quintic(ty)
    top = n00 + (n10 - n00) * u
    bottom = n01 + (n11 - n01) * u
    return top + (bottom - top) * v


def fbm2d(x, y, octaves=4, freq=0.01, lacunarity=2.0, gain=0.5, seed=0):
    total = 0.0
    norm = 0.0
    amp = 1.0
    for octave in range(octaves):
        total = total + amp * gradient_noise2d(np.asarray(x) * freq, np.asarray(y) * freq, seed + octave)
        norm += amp
        freq *= lacunarity
        amp *= gain
    return total / norm if norm else total
