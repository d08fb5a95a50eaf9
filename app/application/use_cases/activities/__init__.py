"""Use cases for managing the lifecycle of activities."""

from .create_activity import create_activity
from .delete_activity import delete_activity
from .duplicates import (
    CollationDuplicateChecker,
    DuplicateChecker,
    ScanningDuplicateChecker,
    find_duplicate,
    select_duplicate_checker,
)
from .get_activity import get_activity
from .import_activities import MAX_IMPORT_ROWS, ImportResult, import_activities
from .list_activities import list_activities
from .spreadsheet import export_activities_workbook, parse_activity_spreadsheet
from .summarize_activities import ActivitySummary, summarize_activities
from .update_activity import update_activity

__all__ = [
    "ActivitySummary",
    "CollationDuplicateChecker",
    "DuplicateChecker",
    "ImportResult",
    "MAX_IMPORT_ROWS",
    "ScanningDuplicateChecker",
    "create_activity",
    "delete_activity",
    "export_activities_workbook",
    "find_duplicate",
    "get_activity",
    "import_activities",
    "list_activities",
    "parse_activity_spreadsheet",
    "select_duplicate_checker",
    "summarize_activities",
    "update_activity",
]
