import logging
import random
import re
import time

from .category_codes import CategoryCodes
from .config import ID_RETRY_DELAY, MAX_ID_ATTEMPTS

logger = logging.getLogger(__name__)

# derived codes may hold any character ('Co-Q10' -> 'CO-'), so only the shape is fixed
ID_PATTERN = re.compile(r'^(.{3})-([0-9]{3})$')


def clock_ms():
    return int(time.time() * 1000)


def format_id(code, number):
    return f'{code}-{number:03d}'


def split_id(generated_id):
    """'ANB-567' -> ('ANB', 567)"""
    m = ID_PATTERN.match(generated_id or '')
    if not m:
        raise ValueError(f'Not a category id: {generated_id!r}')
    return m.group(1), int(m.group(2))


def exists_check(db, table, column, numeric=False):
    """Collision probe for ``IdGenerator.generate``.

    With ``numeric=True`` only the 3-digit suffix is looked up, for tables
    that keep the number in an INTEGER column (``meds_product.product_id``).
    Otherwise the whole ``CODE-NNN`` string is looked up.
    """
    def exists(candidate):
        value = split_id(candidate)[1] if numeric else candidate
        return db.exists(table, column, value)
    return exists


class IdGenerator:
    """Best-effort ``CODE-NNN`` ids from a category and the clock.

    The suffix is the millisecond clock modulo 1000. When an ``exists``
    callback is given, taken candidates are retried after a short sleep up
    to ``max_attempts`` times, then a random suffix in 1..999 is used
    without checking. Collisions stay possible; this is fine for a single
    shop's few hundred products.
    """

    def __init__(self, codes=None, clock=clock_ms, rng=None, sleep=time.sleep,
                 max_attempts=MAX_ID_ATTEMPTS, delay=ID_RETRY_DELAY):
        self.codes = codes if codes is not None else CategoryCodes()
        self.clock = clock
        self.rng = rng or random.Random()
        self.sleep = sleep
        self.max_attempts = max_attempts
        self.delay = delay

    def _suffix(self):
        return self.clock() % 1000

    def generate(self, category_name, exists=None):
        code = self.codes.resolve(category_name)
        if exists is None:
            return format_id(code, self._suffix())

        for attempt in range(1, self.max_attempts + 1):
            candidate = format_id(code, self._suffix())
            if not exists(candidate):
                logger.debug('Generated %s for %r after %d attempt(s)', candidate, category_name, attempt)
                return candidate
            self.sleep(self.delay)

        fallback = format_id(code, self.rng.randint(1, 999))
        logger.warning('No free id for %r after %d attempts, falling back to %s',
                       category_name, self.max_attempts, fallback)
        return fallback
