"""Tracking of team members who are temporarily unavailable for reviews."""

import logging
from datetime import date, datetime, timezone
from typing import Dict, Optional

from .models import parse_timestamp


def normalize_login(login: str) -> str:
    """Strip whitespace and a leading '@' from a login."""
    return str(login).strip().lstrip('@')


class AvailabilityStore:
    """Keeps unavailability entries of the form {since, until}.

    An entry without 'until' means unavailable until explicitly removed.
    Entries whose 'until' lies in the past are treated as available without
    being removed.
    """

    def __init__(self, entries: Dict[str, Dict] = None):
        """
        Initialize the store.

        Args:
            entries: Mapping of login to {'since': iso, 'until': iso or None}.
                     The mapping is updated in place so it can be persisted by its owner.
        """
        self.entries = entries if entries is not None else {}

    def is_unavailable(self, login: str, now: datetime = None) -> bool:
        """Check whether a member is currently unavailable."""
        login = normalize_login(login)
        if login not in self.entries:
            return False

        until = self._until(login)
        if until is None:
            return True

        now = now or datetime.now(timezone.utc)
        return until > now

    def is_available(self, login: str, now: datetime = None) -> bool:
        return not self.is_unavailable(login, now)

    def _until(self, login: str) -> Optional[datetime]:
        """Return date of an entry, None when open-ended or unreadable."""
        entry = self.entries.get(login)
        value = entry.get('until') if isinstance(entry, dict) else None
        if value is not None and not isinstance(value, (str, datetime, date)):
            value = str(value)
        try:
            return parse_timestamp(value)
        except ValueError:
            logging.warning(f"Ignoring invalid 'until' date for {login}: {value!r}, treating as unavailable")
            return None

    def mark_unavailable(self, login: str, until: Optional[datetime] = None,
                         now: datetime = None) -> None:
        """
        Mark a member as unavailable.

        Args:
            login: GitHub login (leading '@' allowed)
            until: When the member is back (None for indefinitely)
            now: Time recorded as the start of the absence
        """
        login = normalize_login(login)
        now = now or datetime.now(timezone.utc)
        self.entries[login] = {
            'since': now.isoformat(),
            'until': until.isoformat() if until else None,
        }
        logging.info(f"Marked {login} as unavailable" + (f" until {until.date()}" if until else ""))

    def mark_available(self, login: str) -> bool:
        """
        Remove the unavailability entry of a member.

        Returns:
            True if an entry was removed
        """
        login = normalize_login(login)
        if login in self.entries:
            del self.entries[login]
            logging.info(f"Marked {login} as available")
            return True
        return False

    def active_entries(self, now: datetime = None) -> Dict[str, Optional[datetime]]:
        """Return currently unavailable members mapped to their return date (None if open-ended)."""
        now = now or datetime.now(timezone.utc)
        return {
            login: self._until(login)
            for login in sorted(self.entries)
            if self.is_unavailable(login, now)
        }
