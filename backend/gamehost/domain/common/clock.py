"""Time helpers; every timestamp the services persist goes through here."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

_DAY_LABEL = re.compile(r"^\d{8}$")


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


def now_ms() -> int:
	return int(utcnow().timestamp() * 1000)


def utc_day_label(offset_days: int = 0, now: Optional[datetime] = None) -> str:
	"""Return the UTC calendar day as a YYYYMMDD string."""
	current = now or utcnow()
	if current.tzinfo is not None:
		current = current.astimezone(timezone.utc)
	if offset_days:
		current = current + timedelta(days=offset_days)
	return str(current.year * 10000 + current.month * 100 + current.day)


def is_day_label(value: str) -> bool:
	if not _DAY_LABEL.match(value):
		return False
	try:
		datetime.strptime(value, "%Y%m%d")
	except ValueError:
		return False
	return True
