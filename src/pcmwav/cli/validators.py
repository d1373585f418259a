import math


def validate_gain_factor(type_: object, factor: float | None) -> None:
    """Validate that a gain factor is a finite, non-negative number."""
    if factor is None:
        return

    if not math.isfinite(factor):
        raise ValueError("Gain factor must be a finite number")

    if factor < 0.0:
        raise ValueError("Gain factor must not be negative")


def validate_sample_rate(type_: object, sample_rate: int | None) -> None:
    if sample_rate is None:
        return

    if not 0 < sample_rate <= 0xFFFFFFFF:
        raise ValueError("Sample rate must be between 1 and 4294967295 Hz")
