"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

EMPLOYEES_KEY = "employees"
ABSENCES_KEY = "absences"

# Bootstrap employees written on first access of an empty store.
SEED_EMPLOYEES = (
    {"id": "1", "name": "Alice Dubois", "role": "Développeuse Frontend"},
    {"id": "2", "name": "Bob Martin", "role": "Chef de Projet"},
    {"id": "3", "name": "Charlie Dupont", "role": "Designer UX/UI"},
    {"id": "4", "name": "David Lefebvre", "role": "Ingénieur Backend"},
)

UNKNOWN_EMPLOYEE = "Unknown"

TOP_EMPLOYEES_LIMIT = 5
TOP_TYPES_LIMIT = 3

CSV_HEADERS = ("Employé", "Date", "Type", "Heure de début", "Heure de fin", "Notes")
CSV_DATE_FORMAT = "%Y-%m-%d"
CSV_BOM = "\ufeff"

DEFAULT_API_TIMEOUT = 10.0
DEFAULT_API_PREFIX = "/api"
