"""Wall-clock helpers. Timestamps are Unix epoch seconds."""

import time
from typing import Callable

Clock = Callable[[], float]


def system_clock() -> float:
    return time.time()
