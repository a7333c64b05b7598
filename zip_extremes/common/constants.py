"""Application constants."""

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_OPEN_FAILURE = 2
EXIT_EMPTY_RESULT = 3
EXIT_CONFIG_ERROR = 4

RECORD_FIELD_COUNT = 6
FIELD_DELIMITER = ","
QUOTE_CHAR = '"'
TRIM_CHARS = " \t\r\n"

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")
SETTINGS_FILENAME = "settings.yml"
DEFAULT_SETTINGS = {
    "reader": {
        "encoding": "utf-8",
    },
    "logging": {
        "level": "INFO",
    },
    "report": {
        "region_width": 8,
        "column_width": 15,
        "code_width": 5,
        "separator_width": 68,
    },
}

EXTREME_COLUMNS = (
    ("easternmost", "Easternmost"),
    ("westernmost", "Westernmost"),
    ("northernmost", "Northernmost"),
    ("southernmost", "Southernmost"),
)
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "event",
    "status",
    "line_number",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
