from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class UtilityContract:
    """A utility's storm-response engagement; crews are assigned to one."""

    id: int
    utility_name: str
    storm_event: str
    region: str
    contract_number: str
    active: bool
    start_date: date
    end_date: Optional[date] = None
