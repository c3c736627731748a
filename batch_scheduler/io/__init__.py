"""I/O utilities for CSV import/export."""

from .export_csv import export_schedule_csv
from .import_csv import (
    import_batches_csv,
    import_courses_csv,
    import_holidays_csv,
    import_leaves_csv,
    import_subjects_csv,
    import_trainers_csv,
)

__all__ = [
    "import_trainers_csv",
    "import_leaves_csv",
    "import_subjects_csv",
    "import_courses_csv",
    "import_batches_csv",
    "import_holidays_csv",
    "export_schedule_csv",
]
