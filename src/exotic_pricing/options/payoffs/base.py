"""
Option variant definitions and shared payoff helpers.

The variant set is closed: Asian, Barrier and Lookback, each carrying its
own sub-configuration. Callers dispatch on the spec type explicitly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np

from exotic_pricing.errors import InvalidBarrierError, ParameterValidationError


class OptionType(Enum):
    """Option type enumeration."""

    CALL = "call"
    PUT = "put"


class AverageType(Enum):
    """Asian averaging method."""

    ARITHMETIC = "arithmetic"
    GEOMETRIC = "geometric"


class BarrierDirection(Enum):
    """Side of spot the barrier sits on."""

    UP = "up"
    DOWN = "down"


class KnockType(Enum):
    """Whether a breach activates or extinguishes the option."""

    IN = "in"
    OUT = "out"


class LookbackType(Enum):
    """Lookback strike convention."""

    FIXED = "fixed"  # Extremum vs strike
    FLOATING = "floating"  # Extremum vs terminal price


@dataclass(frozen=True)
class AsianSpec:
    """
    Asian option on the average of all n+1 monitored prices (S0 included).

    Attributes
    ----------
    option_type : OptionType
        Call or put
    average_type : AverageType
        Arithmetic or geometric average
    """

    option_type: OptionType
    average_type: AverageType = AverageType.ARITHMETIC

    @property
    def tag(self) -> str:
        return f"asian-{self.option_type.value}"


@dataclass(frozen=True)
class BarrierSpec:
    """
    Single-barrier option with discrete monitoring.

    Attributes
    ----------
    option_type : OptionType
        Call or put
    barrier : float
        Barrier level H
    direction : BarrierDirection
        Up or down
    knock : KnockType
        In or out
    """

    option_type: OptionType
    barrier: float
    direction: BarrierDirection
    knock: KnockType

    def __post_init__(self) -> None:
        """Validate barrier level."""
        if not self.barrier > 0:
            raise ParameterValidationError(
                f"CRITICAL: barrier must be > 0, got {self.barrier}"
            )

    @property
    def tag(self) -> str:
        return (
            f"barrier-{self.direction.value}-{self.knock.value}-{self.option_type.value}"
        )

    def validate_against_spot(self, spot: float) -> None:
        """
        Check barrier placement relative to spot.

        Raises
        ------
        InvalidBarrierError
            If an up barrier is at or below spot, or a down barrier at or
            above spot
        """
        if self.direction == BarrierDirection.UP and self.barrier <= spot:
            raise InvalidBarrierError(self.barrier, spot, "up")
        if self.direction == BarrierDirection.DOWN and self.barrier >= spot:
            raise InvalidBarrierError(self.barrier, spot, "down")


@dataclass(frozen=True)
class LookbackSpec:
    """
    Lookback option on the running extremum of the path.

    Attributes
    ----------
    option_type : OptionType
        Call or put
    lookback_type : LookbackType
        Fixed or floating strike
    """

    option_type: OptionType
    lookback_type: LookbackType = LookbackType.FIXED

    @property
    def tag(self) -> str:
        return f"lookback-{self.lookback_type.value}-{self.option_type.value}"


OptionVariant = Union[AsianSpec, BarrierSpec, LookbackSpec]


def vanilla_payoff(
    underlying: np.ndarray,
    strike: float,
    option_type: OptionType,
) -> np.ndarray:
    """
    Vectorized intrinsic value.

    [T1] Call payoff: max(S - K, 0)
    [T1] Put payoff: max(K - S, 0)

    Parameters
    ----------
    underlying : np.ndarray
        Reference prices (terminal price, average, ...)
    strike : float
        Strike price
    option_type : OptionType
        Call or put

    Returns
    -------
    np.ndarray
        Undiscounted payoffs
    """
    if option_type == OptionType.CALL:
        return np.maximum(underlying - strike, 0.0)
    else:
        return np.maximum(strike - underlying, 0.0)
