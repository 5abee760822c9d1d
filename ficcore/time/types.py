"""
Business-day conventions and schedule generation rules.
"""
from enum import Enum
from typing import Union

from ficcore.errors import InvalidArgumentError


class _CoercibleEnum(Enum):
    """Enum accepting its member, its name or its value on lookup."""

    @classmethod
    def coerce(cls, value: Union["_CoercibleEnum", str]):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace(" ", "_").replace("-", "_")
            if key in cls.__members__:
                return cls.__members__[key]
            for member in cls:
                if member.value == key:
                    return member
        raise InvalidArgumentError(
            f"Unknown {cls.__name__}: {value}. Available: {list(cls.__members__)}"
        )


class BusinessDayConvention(_CoercibleEnum):
    """Rolling rules for dates falling on holidays."""

    FOLLOWING = "F"
    MODIFIED_FOLLOWING = "MF"
    PRECEDING = "P"
    MODIFIED_PRECEDING = "MP"
    UNADJUSTED = "U"
    HALF_MONTH_MODIFIED_FOLLOWING = "HMMF"
    NEAREST = "N"


class DateGenerationRule(_CoercibleEnum):
    """Direction and anchoring of schedule generation."""

    BACKWARD = "BACKWARD"
    FORWARD = "FORWARD"
    ZERO = "ZERO"
    TWENTIETH = "TWENTIETH"
    TWENTIETH_IMM = "TWENTIETH_IMM"
