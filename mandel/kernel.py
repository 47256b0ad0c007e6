import numpy as np

ESCAPE_RADIUS_SQ = 4.0


def iterate(x0: float, y0: float, max_iters: int) -> int:
    """
    Escape-time count for c = x0 + i*y0 under z_{n+1} = z_n^2 + c, z_0 = 0.

    Returns the iteration at which |z|^2 >= 4 was first seen, or max_iters if
    the orbit stayed bounded for the whole budget.
    """
    x = 0.0
    y = 0.0
    i = 0
    while i < max_iters and (x * x + y * y) < ESCAPE_RADIUS_SQ:
        x_temp = x * x - y * y + x0
        # y must use the pre-update x
        y = 2 * x * y + y0
        x = x_temp
        i += 1
    return i


def iterate_grid(x0, y0, max_iters: int) -> np.ndarray:
    """
    Vectorized version of iterate over arrays of seeds.

    x0 and y0 must broadcast to the same shape. Each element goes through the
    same floating point operations as the scalar kernel, so counts match
    iterate() exactly.
    """
    x0, y0 = np.broadcast_arrays(
        np.asarray(x0, dtype=np.float64), np.asarray(y0, dtype=np.float64)
    )
    x = np.zeros(x0.shape, dtype=np.float64)
    y = np.zeros(x0.shape, dtype=np.float64)
    counts = np.zeros(x0.shape, dtype=np.int64)

    # Points still iterating
    active = np.ones(x0.shape, dtype=bool)

    for _ in range(max_iters):
        active &= (x * x + y * y) < ESCAPE_RADIUS_SQ
        if not active.any():
            break

        xa = x[active]
        ya = y[active]
        x_temp = xa * xa - ya * ya + x0[active]
        y[active] = 2 * xa * ya + y0[active]
        x[active] = x_temp
        counts[active] += 1

    return counts
