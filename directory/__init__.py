#Marks directory as a package.
#Re-exports the upstream client and the directory models so the proxy views
#and the search controller import from directory without knowing file names.
#No business logic.

from .client import ALL_MUNICIPALITIES, DirectoryClient, DirectoryError, build_units_query
from .models import HealthUnit, ResultSet, count_units, parse_result_set

__all__ = [
    "ALL_MUNICIPALITIES",
    "DirectoryClient",
    "DirectoryError",
    "build_units_query",
    "HealthUnit",
    "ResultSet",
    "count_units",
    "parse_result_set",
]
