"""Services for scheduling logic."""

from .dependencies import DependencyCheck, check_dependencies
from .matching import find_suitable_workers
from .recommendations import generate_recommendations
from .sequencing import sequence_orders
from .timeplan import make_datetime, parse_time_string
from .validation import validate_schedule

__all__ = [
    "DependencyCheck",
    "check_dependencies",
    "find_suitable_workers",
    "generate_recommendations",
    "sequence_orders",
    "make_datetime",
    "parse_time_string",
    "validate_schedule",
]
