import math
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .config import CHOICES


class VoteIn(BaseModel):
    # left loose so bad values reach cast_vote and come back as 400, not 422
    vote: Optional[Any] = Field(None, examples=["jajang"])


class Counter(BaseModel):
    """
    Running tally for the two choices. This is exactly what is written to
    the votes file and what /api/result returns.
    """
    jajang: int = Field(0, ge=0)
    jjamppong: int = Field(0, ge=0)


def coerce_count(value: Any) -> int:
    """
    Turn one stored field into a non-negative int.
    Floors fractions; anything negative, non-finite or non-numeric is 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value if value >= 0 else 0
    if isinstance(value, str):
        # digit separators are Python-only syntax, not a stored number
        if "_" in value:
            return 0
        try:
            value = float(value.strip() or "0")
        except ValueError:
            return 0
    if not isinstance(value, float):
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return math.floor(value)


def normalize(raw: Any) -> Counter:
    data: Dict[str, Any] = raw if isinstance(raw, dict) else {}
    return Counter(**{choice: coerce_count(data.get(choice)) for choice in CHOICES})
