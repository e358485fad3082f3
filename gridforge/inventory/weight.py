"""Container weight totals.  Advisory only, never enforced on placement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from gridforge.layout.models import ContainerInstance, ContainerDefinition, ItemDefinition


@dataclass
class WeightReport:
    current: float
    maximum: float | None       # None = unlimited
    overweight: bool
    overweight_by: float        # 0 when within capacity
    percent: float              # share of maximum used; 0 without a limit


def current_weight(
    container: ContainerInstance,
    item_defs: Mapping[str, ItemDefinition],
) -> float:
    """Sum of definition weights of every item in the container.

    Items whose definition is missing weigh nothing.
    """
    total = 0.0
    for item in container.items:
        d = item_defs.get(item.def_id)
        if d is not None:
            total += d.weight
    return total


def weight_report(
    container: ContainerInstance,
    container_def: ContainerDefinition,
    item_defs: Mapping[str, ItemDefinition],
) -> WeightReport:
    current = current_weight(container, item_defs)
    maximum = container_def.max_weight
    if maximum is None:
        return WeightReport(current=current, maximum=None, overweight=False,
                            overweight_by=0.0, percent=0.0)

    over = current > maximum
    return WeightReport(
        current=current,
        maximum=maximum,
        overweight=over,
        overweight_by=current - maximum if over else 0.0,
        percent=(current / maximum) * 100 if maximum else 0.0,
    )
