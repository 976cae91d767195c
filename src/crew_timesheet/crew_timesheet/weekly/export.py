from __future__ import annotations

import csv
import io

from .service import WeeklyGridView, member_rows


def _cell_text(cell) -> str:
    if cell.hours is None:
        return cell.status.value
    return f"{cell.status.value} ({cell.hours:g}h)"


def week_csv_filename(view: WeeklyGridView) -> str:
    return f"timesheets_{view.window.start.strftime('%Y%m%d')}_{view.window.end.strftime('%Y%m%d')}.csv"


def write_week_csv(view: WeeklyGridView) -> bytes:
    """One row per member; one column per displayed date."""
    date_columns = [d.strftime("%Y-%m-%d") for d in view.display_dates]
    out = io.StringIO()
    writer = csv.DictWriter(
        out,
        fieldnames=["crew_name", "utility_company", "member_name", "role", *date_columns, "total_hours"],
    )
    writer.writeheader()
    for crew_week, member_week in member_rows(view):
        row = {
            "crew_name": crew_week.crew.crew_name,
            "utility_company": crew_week.crew.utility_company,
            "member_name": member_week.member.name,
            "role": member_week.member.role,
        }
        total = 0.0
        for d, column in zip(view.display_dates, date_columns):
            cell = member_week.cells[d]
            row[column] = _cell_text(cell)
            total += cell.hours or 0.0
        row["total_hours"] = f"{total:g}"
        writer.writerow(row)

    return out.getvalue().encode("utf-8-sig")
