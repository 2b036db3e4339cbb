"""Application constants."""

USER_AGENT = "vaketracker/1.0 (+field-activity dashboard)"
COMMANDS = (
    "classify",
    "heatmap",
    "chart",
    "summary",
    "tracking",
    "capture",
)
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20
COORDINATE_DECIMALS = 6
AUTO_LOCATION_ADDRESS = "Ubicación automática"
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "command",
    "country",
    "source",
    "event",
    "status",
    "records_in",
    "records_out",
    "skipped",
    "duration_ms",
    "error_code",
    "message",
)
