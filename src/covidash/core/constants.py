import re
from zoneinfo import ZoneInfo

IST = ZoneInfo("Asia/Kolkata")
# appended to bare YYYY-MM-DD strings so they read as midnight in India
INDIA_ISO_SUFFIX = "T00:00:00+05:30"
ISO_DATE_REGEX = re.compile(r"^\d{4}-(0\d|1[0-2])-([0-2]\d|3[01])$")

# statistics for which a reported 0 means "not reported"
NAN_STATISTICS = ("tested", "tpr", "vaccinated", "population")
STALE_STATISTICS = ("tested", "tpr")
TESTED_LOOKBACK_DAYS = 7

DEFAULT_LOCALE = "en"
NUMBER_LOCALE = "en_IN"
