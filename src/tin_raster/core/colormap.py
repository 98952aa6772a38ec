"""Altitude to RGB via a Haxby-like piecewise-linear color ramp."""

# (t, (r, g, b)): deep blue, blue, cyan, green, yellow, orange, red, white
COLOR_STOPS: tuple[tuple[float, tuple[int, int, int]], ...] = (
    (0.00, (0, 0, 128)),
    (0.10, (0, 0, 255)),
    (0.25, (0, 255, 255)),
    (0.40, (0, 255, 0)),
    (0.60, (255, 255, 0)),
    (0.80, (255, 128, 0)),
    (0.95, (255, 0, 0)),
    (1.00, (255, 255, 255)),
)


def normalize_altitude(z: float, min_z: float, max_z: float) -> float:
    """Map z into [0, 1]. A flat range (min_z == max_z) maps everything to 0."""
    span = max_z - min_z
    if span <= 0:
        return 0.0
    t = (z - min_z) / span
    return max(0.0, min(1.0, t))


def color_for(z: float, min_z: float, max_z: float) -> tuple[int, int, int]:
    """Return the (r, g, b) color for altitude z within [min_z, max_z]."""
    t = normalize_altitude(z, min_z, max_z)

    for (t0, c0), (t1, c1) in zip(COLOR_STOPS, COLOR_STOPS[1:]):
        if t0 <= t <= t1:
            local = (t - t0) / (t1 - t0)
            return (
                int(c0[0] + local * (c1[0] - c0[0])),
                int(c0[1] + local * (c1[1] - c0[1])),
                int(c0[2] + local * (c1[2] - c0[2])),
            )
    return COLOR_STOPS[-1][1]
