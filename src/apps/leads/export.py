"""CSV export of submissions."""

import csv
from collections.abc import Iterable
from typing import TextIO

from django.utils import timezone

from .models import Submission

CSV_HEADERS = ["Name", "Email", "Goal", "Budget", "Package", "Status", "Created Date"]
CSV_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def export_filename(today=None) -> str:
    today = today or timezone.localdate()
    return f"submissions-{today:%Y-%m-%d}.csv"


def write_submissions_csv(submissions: Iterable[Submission], stream: TextIO) -> int:
    """Write every submission as a quoted CSV row. Returns the number of rows."""
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    count = 0
    for sub in submissions:
        writer.writerow(
            [
                sub.name,
                sub.email,
                sub.goal,
                sub.budget,
                sub.recommended_package,
                sub.status,
                timezone.localtime(sub.created_at).strftime(CSV_DATE_FORMAT),
            ]
        )
        count += 1
    return count
