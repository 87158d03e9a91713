"""Daily usage counter for privileged calls (LLM requests).

The counter is advisory: it only does bookkeeping, the caller decides to
refuse. A new day is detected lazily when the record is read.

increment_usage() is a plain read-then-write on a single key. Two processes
sharing the same store can lose an increment; that is accepted here.
"""
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime

logger = logging.getLogger(__name__)

USAGE_KEY = "groq_usage"


class CorruptState(ValueError):
    pass


class QuotaExceeded(Exception):
    pass


@dataclass(frozen=True)
class UsageRecord:
    date: str
    count: int

    def to_json(self):
        return json.dumps({"date": self.date, "count": self.count})

    def remaining(self, limit):
        return max(0, limit - self.count)

    def display(self, limit):
        return f"{self.count}/{limit}"


def parse(raw):
    """Turn a stored string into a UsageRecord or raise CorruptState."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise CorruptState(f"usage record is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise CorruptState("usage record is not an object")
    date = data.get("date")
    count = data.get("count")
    if not isinstance(date, str):
        raise CorruptState("usage record has no date")
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise CorruptState("usage record has an invalid count")
    return UsageRecord(date=date, count=count)


class MemoryStore:
    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class FileStore:
    """One file per key: <directory>/<key>.json holds the raw value.

    Writes go to a temp file in the same directory and are moved into place
    with os.replace, so a reader sees either the old or the new value.
    OSError from the filesystem is not caught.
    """

    def __init__(self, directory="."):
        self.directory = directory

    def path(self, key):
        return os.path.join(self.directory, f"{key}.json")

    def get(self, key):
        try:
            with open(self.path(key), "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def set(self, key, value):
        os.makedirs(self.directory, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.directory, prefix=f".{key}.", suffix=".tmp", delete=False
        ) as f:
            f.write(value)
        try:
            os.replace(f.name, self.path(key))
        except OSError:
            os.unlink(f.name)
            raise


class UsageTracker:
    def __init__(self, store, key=USAGE_KEY, clock=datetime.now):
        self.store = store
        self.key = key
        self.clock = clock

    def current_day_key(self):
        d = self.clock()
        return f"{d.year}-{d.month}-{d.day}"

    def get_usage(self):
        today = self.current_day_key()
        raw = self.store.get(self.key)
        if not raw:
            return UsageRecord(date=today, count=0)

        try:
            record = parse(raw)
        except CorruptState as e:
            logger.warning("Ignoring corrupt usage record %r: %s", self.key, e)
            return UsageRecord(date=today, count=0)

        if record.date != today:
            return UsageRecord(date=today, count=0)
        return record

    def set_usage(self, count):
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"count must be a non-negative integer, got {count!r}")
        record = UsageRecord(date=self.current_day_key(), count=count)
        self.store.set(self.key, record.to_json())

    def increment_usage(self):
        new_count = self.get_usage().count + 1
        self.set_usage(new_count)
        return new_count

    def is_over_limit(self, limit):
        _check_limit(limit)
        return self.get_usage().count >= limit

    def format_usage(self, limit):
        return self.get_usage().display(limit)


def _check_limit(limit):
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
