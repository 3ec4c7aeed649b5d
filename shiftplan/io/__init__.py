"""I/O utilities: CSV import and the demo dataset."""

from .import_csv import import_areas_csv, import_orders_csv, import_process_steps_csv, import_workers_csv
from .sample_data import seed_sample_data

__all__ = [
    "import_workers_csv",
    "import_areas_csv",
    "import_process_steps_csv",
    "import_orders_csv",
    "seed_sample_data",
]
