# EntropyReporter
# (entropy and guess time estimates)
#

import sys
import math
import logging
from subprocess import Popen, PIPE
from typing import NamedTuple

log = logging.getLogger(__name__)

MINUTE = 60.0
HOUR = MINUTE * 60
DAY = HOUR * 24
YEAR = DAY * 365.25
CENTURY = YEAR * 100

# (unit length, upper bound, unit name), the first matching bound wins
TIME_UNITS = (
    (1.0, MINUTE, 'seconds'),
    (MINUTE, HOUR, 'minutes'),
    (HOUR, DAY, 'hours'),
    (DAY, YEAR, 'days'),
    (YEAR, CENTURY, 'years'),
)

# Guesses per second expressed in bits, plus one bit for the average case
# (half of the space searched). 10^9 ~ 2^30, 10^15 ~ 2^50, 10^21 ~ 2^70.
GUESS_RATES = (
    ('1 billion / second', 31),
    ('1 quadrillion / second', 51),
    ('1 sextillion / second', 71),
)

LABEL_WIDTH = 28
DEFAULT_WIDTH = 80


def format_unit(x: float, unit: str) -> str:
    if x < 1e6:
        return f"{x:.0f} {unit}"
    mantissa, _, exponent = f"{x:.0e}".partition('e')
    if exponent:
        return f"{mantissa}e+{int(exponent)} {unit}"
    return f"{mantissa} {unit}"  # inf


def format_time(seconds: float) -> str:
    """Human readable duration, e.g. "3 days" or "2e+12 centuries"."""
    if seconds < 1:
        return "less than a second"
    for length, bound, unit in TIME_UNITS:
        if seconds < bound:
            return format_unit(seconds / length, unit)
    return format_unit(seconds / CENTURY, 'centuries')


def guess_time(total_entropy: float, rate_bits: int) -> float:
    """Seconds needed to guess a secret at 2^`rate_bits` guesses per second."""
    try:
        return 2.0 ** (total_entropy - rate_bits)
    except OverflowError:
        return math.inf


def tput_columns() -> int:
    """Terminal width as reported by `tput cols`.

    Falls back to DEFAULT_WIDTH on any failure.

    """
    try:
        p = Popen(['tput', 'cols'], stdout=PIPE)
        outs, _ = p.communicate()
        return int(outs.decode('utf-8').strip())
    except (OSError, UnicodeDecodeError, ValueError) as e:
        log.debug("Unable to get terminal width: %s", e)
        return DEFAULT_WIDTH


class Report(NamedTuple):
    entropy_per_token: float
    total_entropy: float
    guess_times: tuple  # ((label, seconds), ...)

    def lines(self) -> list:
        lines = [
            "entropy per token:".ljust(LABEL_WIDTH) + f"{self.entropy_per_token:.1f} bits",
            "total entropy:".ljust(LABEL_WIDTH) + f"{self.total_entropy:.0f} bits",
            "guess times:",
        ]
        for label, seconds in self.guess_times:
            lines.append(f"  {label}:".ljust(LABEL_WIDTH) + format_time(seconds))
        return lines


def compute(pool_size: float, token_count: float) -> Report:
    entropy = math.log2(pool_size)
    total_entropy = entropy * token_count
    guess_times = tuple((label, guess_time(total_entropy, bits))
                        for label, bits in GUESS_RATES)
    return Report(entropy, total_entropy, guess_times)


class EntropyReporter:

    """Print entropy of generated passphrases and estimated guess times.

    :param width_provider: Callable returning the width of the closing
                           separator line. Default is `tput_columns`.
    :param file: Output stream. Default is sys.stderr.

    """

    def __init__(self, width_provider=None, file=None):
        self._width_provider = width_provider
        self._file = file

    def compute(self, pool_size, token_count) -> Report:
        return compute(float(pool_size), float(token_count))

    def print_report(self, pool_size, token_count) -> Report:
        report = self.compute(pool_size, token_count)
        file = sys.stderr if self._file is None else self._file
        width_provider = self._width_provider or tput_columns
        for line in report.lines():
            print(line, file=file)
        print('-' * width_provider(), file=file)
        return report
