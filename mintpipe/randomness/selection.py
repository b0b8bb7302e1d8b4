"""Map a random value onto a catalog position."""


def select_index(random_value: int, catalog_size: int) -> int:
    """Reduce a random value modulo the catalog size.

    The reduction is slightly biased towards low indices whenever the
    catalog size does not divide the random value's range.

    Raises:
        TypeError: If random_value is not an integer
        ValueError: If catalog_size < 1 or random_value is negative
    """
    if isinstance(random_value, bool) or not isinstance(random_value, int):
        raise TypeError(f"random_value must be an int, got {type(random_value).__name__}")
    if catalog_size < 1:
        raise ValueError(f"catalog_size must be >= 1, got {catalog_size}")
    if random_value < 0:
        raise ValueError(f"random_value must be non-negative, got {random_value}")
    return random_value % catalog_size
