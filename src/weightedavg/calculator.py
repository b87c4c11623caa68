# validation and reduction for weighted averages.
# pure functions only: no i/o, no shared state, safe to call from any thread
# the int overloads widen at the boundary and delegate to calculate_weighted_average

from __future__ import annotations
import logging
import math
from numbers import Real
from typing import List, Optional, Sequence, Tuple, Union
from .models import InvalidInput

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _check_numeric(x, name: str) -> None:
    # bool is an int subclass but never a meaningful value or weight
    if isinstance(x, bool) or not isinstance(x, Real):
        raise InvalidInput(f"{name} must be numeric (got {x!r})")


def _validate(values: Optional[Sequence[Number]], weights: Optional[Sequence[Number]]) -> None:
    # all-or-nothing: the first broken rule raises, nothing is computed before this returns
    if values is None or weights is None:
        raise InvalidInput("Values and weights lists cannot be null")

    if len(values) == 0 or len(weights) == 0:
        raise InvalidInput("Values and weights lists cannot be empty")

    if len(values) != len(weights):
        raise InvalidInput(
            f"Values and weights lists must have same size. "
            f"Got {len(values)} values and {len(weights)} weights"
        )

    for value, weight in zip(values, weights):
        if value is None or weight is None:
            raise InvalidInput("Values and weights cannot contain null elements")

        _check_numeric(value, "Values")
        _check_numeric(weight, "Weights")

        if not math.isfinite(value):
            raise InvalidInput("Values cannot be NaN or infinite")
        if not math.isfinite(weight):
            raise InvalidInput("Weights cannot be NaN or infinite")
        if weight < 0:
            raise InvalidInput("Weights cannot be negative")

    if all(weight == 0 for weight in weights):
        raise InvalidInput("At least one weight must be non-zero")


def _widen(seq: Optional[Sequence[Number]]) -> Optional[List[Number]]:
    # ints, Fractions and other reals -> float; anything else (including None) passes
    # through for the validator to judge
    if seq is None:
        return None
    try:
        return [
            float(x) if isinstance(x, Real) and not isinstance(x, bool) else x
            for x in seq
        ]
    except OverflowError as exc:
        # too large for a double
        raise InvalidInput(f"Cannot widen to floating point: {exc}") from exc


def _accumulate(values: Sequence[float], weights: Sequence[float]) -> Tuple[float, float]:
    sum_product = 0.0
    sum_weights = 0.0
    # natural order on purpose, float sums depend on it
    for value, weight in zip(values, weights):
        sum_product += value * weight
        sum_weights += weight
    return sum_product, sum_weights


def calculate_weighted_average(
    values: Optional[Sequence[Number]], weights: Optional[Sequence[Number]]
) -> float:
    """Return sum(value * weight) / sum(weight) over the paired sequences.

    Integer and other real elements are widened to float first. Raises
    InvalidInput when either sequence is None or empty, the lengths differ, an
    element is None or not a finite number, a weight is negative, or every
    weight is zero. Sums that overflow a double are recomputed on rescaled
    inputs, so finite inputs always give a finite result.
    """
    values = _widen(values)
    weights = _widen(weights)
    _validate(values, weights)

    # the single value is the answer, its (non-zero) weight cannot move it
    if len(values) == 1:
        return float(values[0])

    scale_exp = 0
    sum_product, sum_weights = _accumulate(values, weights)
    if not (math.isfinite(sum_product) and math.isfinite(sum_weights)):
        # finite inputs overflowed the sums: redo with values and weights scaled by
        # powers of two into [0, 1), then scale the quotient back
        _, scale_exp = math.frexp(max(abs(v) for v in values))
        _, weight_exp = math.frexp(max(weights))
        logger.debug("sums overflowed, rescaling by 2**-%d and 2**-%d", scale_exp, weight_exp)
        sum_product, sum_weights = _accumulate(
            [math.ldexp(v, -scale_exp) for v in values],
            [math.ldexp(w, -weight_exp) for w in weights],
        )

    # unreachable after _validate, kept as an invariant guard
    if sum_weights == 0.0:
        raise InvalidInput("Total weight cannot be zero")

    result = math.ldexp(sum_product / sum_weights, scale_exp)
    logger.debug("weighted average of %d values = %r", len(values), result)
    return result


def calculate_weighted_average_with_int_values(
    values: Sequence[int], weights: Sequence[float]
) -> float:
    return calculate_weighted_average(_widen(values), weights)


def calculate_weighted_average_with_int_weights(
    values: Sequence[float], weights: Sequence[int]
) -> float:
    return calculate_weighted_average(values, _widen(weights))


def calculate_weighted_average_with_ints(values: Sequence[int], weights: Sequence[int]) -> float:
    return calculate_weighted_average(_widen(values), _widen(weights))
