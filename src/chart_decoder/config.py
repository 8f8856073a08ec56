# Legend layout
LEGEND_ROW_TOLERANCE_PX = 20.0

# Date range selector names the day after the last plotted day
RANGE_END_EXCLUSIVE = True

# Axis value label suffixes
VALUE_SUFFIX_MULTIPLIERS: dict[str, int] = {
    "k": 1_000,
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
}

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Placeholders
SERIES_NAME_TEMPLATE = "Series {n}"
POINT_LABEL_TEMPLATE = "Point {n}"

# Year used to order dates that carry no year of their own
YEARLESS_SORT_YEAR = 2000

# Output
CSV_DATE_HEADER = "Date"
DEFAULT_JSON_SUFFIX = ".json"
DEFAULT_CSV_SUFFIX = ".csv"
