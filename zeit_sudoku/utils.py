import logging
from typing import Iterable

logger = logging.getLogger("zeit_sudoku")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """Attach a stream handler to the package logger (idempotent)."""
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


def bit_of(num: int) -> int:
    return 1 << (num - 1) if num > 0 else 0

def val_of(mask: int) -> int:
    if mask == 0:
        return 0
    if mask < 0 or (mask & (mask - 1)) != 0:
        raise ValueError(f"Mask {mask:09b} must have exactly one bit set")
    return mask.bit_length()

def bits_iter(mask: int) -> Iterable[int]:
    """Yield each single-bit mask contained in mask, lowest first."""
    while mask:
        bit = mask & -mask
        yield bit
        mask &= mask - 1

def num_ones(mask: int) -> int:
    return bin(mask).count("1")
