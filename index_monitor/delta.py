"""Decide whether a record-count change is large enough to go look at the build logs."""
from dataclasses import dataclass
from enum import Enum


class DeltaPolicy(Enum):
    # negative threshold watches drops, positive watches rises
    SIGNED = "signed"
    # any change whose size exceeds |threshold|
    MAGNITUDE = "magnitude"


@dataclass(frozen=True)
class DeltaResult:
    delta: int
    triggered: bool


def evaluate_delta(
    current_count: int,
    expected_count: int,
    threshold: int,
    policy: DeltaPolicy = DeltaPolicy.SIGNED,
) -> DeltaResult:
    """Compare current vs expected record count against threshold. Pure; a zero threshold never triggers under SIGNED."""
    delta = current_count - expected_count
    if policy is DeltaPolicy.MAGNITUDE:
        triggered = abs(delta) > abs(threshold)
    else:
        triggered = (threshold < 0 and delta < threshold) or (threshold > 0 and delta > threshold)
    return DeltaResult(delta=delta, triggered=triggered)
