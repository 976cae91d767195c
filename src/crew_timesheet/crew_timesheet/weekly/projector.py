from __future__ import annotations

import logging
from typing import Sequence

from .model import (
    AttendanceCell,
    CrewWeek,
    GridCrew,
    MemberWeek,
    WeeklyAttendance,
    frozen_cells,
)
from .sources import AttendanceSource
from .window import WeekWindow

logger = logging.getLogger(__name__)


class WeeklyAttendanceProjector:
    """Build the crews x members x dates grid for one window.

    Every member of every crew gets a cell for each of the 7 window dates,
    ``missing`` where the source has nothing. Crews without members produce
    no rows. Source errors propagate unchanged.
    """

    def __init__(self, source: AttendanceSource):
        self._source = source

    def project(self, crews: Sequence[GridCrew], window: WeekWindow) -> WeeklyAttendance:
        dates = window.dates()

        member_ids: list[int] = []
        seen: set[int] = set()
        for crew in crews:
            for member in crew.members:
                if member.id not in seen:
                    seen.add(member.id)
                    member_ids.append(member.id)

        found = self._source.fetch(member_ids, window) if member_ids else {}
        logger.debug(
            "projecting %s crews / %s members for %s: %s recorded cells",
            len(crews), len(member_ids), window.start, len(found),
        )

        missing = AttendanceCell.missing()
        crew_weeks = []
        for crew in crews:
            rows = tuple(
                MemberWeek(
                    member=member,
                    cells=frozen_cells({d: found.get((member.id, d), missing) for d in dates}),
                )
                for member in crew.members
            )
            crew_weeks.append(CrewWeek(crew=crew, members=rows))

        return WeeklyAttendance(window=window, crews=tuple(crew_weeks))
