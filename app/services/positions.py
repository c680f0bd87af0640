"""Position arithmetic shared by column and card ordering."""

import math


def clamp_position(raw: object, minimum: int, maximum: int, fallback: int) -> int:
    """
    Coerce a requested 1-based slot into [minimum, maximum].

    None means "not requested" and yields fallback. Anything that is not a
    finite number, or is below minimum, yields minimum; anything above maximum
    yields maximum. Never raises.
    """
    if raw is None:
        return fallback
    if isinstance(raw, bool):
        return minimum
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return minimum
    if not math.isfinite(value) or value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return int(value)


def is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
