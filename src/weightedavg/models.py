# error type and a small value object so data shapes stay explicit across the app

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence


class InvalidInput(ValueError):
    # single error type for every rejected input, message names the failed rule
    pass


@dataclass(frozen=True)
class Example:
    # immutable description of one computation run by the demo
    label: str
    values: Sequence[float]
    weights: Sequence[float]
    # demo-only: the example is supposed to be rejected
    expect_error: bool = False
