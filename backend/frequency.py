import logging
import re
from typing import Optional
from constants import FREQUENCY_CONSTANTS

logger = logging.getLogger(__name__)

_FIRST_NUMBER = re.compile(r"\d+")

def doses_per_day(frequency: Optional[str]) -> int:
    """
    Maps a free-text administration frequency to doses per day (>= 1).

    1. Known phrases, case-insensitive, first match wins.
    2. "every N hours": first run of digits N, if N divides 24.
    3. Anything else (e.g. "as needed") -> 1. Never guess a higher frequency.
    """
    if not frequency:
        return FREQUENCY_CONSTANTS.DEFAULT_DOSES_PER_DAY

    text = frequency.lower()
    for phrases, count in FREQUENCY_CONSTANTS.PHRASES:
        if any(phrase in text for phrase in phrases):
            return count

    match = _FIRST_NUMBER.search(text)
    if match:
        hours = int(match.group(0))
        if hours > 0 and FREQUENCY_CONSTANTS.HOURS_PER_DAY % hours == 0:
            return FREQUENCY_CONSTANTS.HOURS_PER_DAY // hours

    logger.info(f"Unparsable frequency '{frequency}', defaulting to "
                f"{FREQUENCY_CONSTANTS.DEFAULT_DOSES_PER_DAY} dose/day")
    return FREQUENCY_CONSTANTS.DEFAULT_DOSES_PER_DAY
