"""
# Client State Store

Explicit application state for Freet front ends: the logged-in user, the freet
feed and its filter, the viewed profile's contact information and follower
lists, plus transient alerts.

Alerts are keyed by message and expire `ALERT_TTL_SECONDS` after they are
raised. Expiry is checked, not scheduled: `visible_alerts(now)` never returns
an expired alert, and `sweep_alerts(now)` (or the `sweep_alerts_periodically`
task) drops them from the state.

State survives restarts through `persist()` / `AppState.load()` JSON
snapshots. Alerts are never persisted.
"""

import asyncio
from pathlib import Path
import time
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from freet_social.config import settings
from freet_social.managers.logging_manager import get_logger

logger = get_logger(prefix="[ClientState]")


class Alert(BaseModel):
    status: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class AppState(BaseModel):
    filter: Optional[str] = None
    freets: List[Dict[str, Any]] = Field(default_factory=list)
    username: Optional[str] = None
    alerts: Dict[str, Alert] = Field(default_factory=dict)
    contact_displayed: Optional[bool] = None
    contact_number: Optional[str] = None
    contact_email: Optional[str] = None
    contact_website: Optional[str] = None
    contact_address: Optional[str] = None
    contact_information: Dict[str, Any] = Field(default_factory=dict)
    followers: List[str] = Field(default_factory=list)
    following: List[str] = Field(default_factory=list)

    def alert(self, message: str, status: str, now: Optional[float] = None, ttl: Optional[float] = None) -> Alert:
        """Raise (or refresh) the alert for `message`."""
        now = time.time() if now is None else now
        ttl = settings.ALERT_TTL_SECONDS if ttl is None else ttl
        alert = Alert(status=status, expires_at=now + ttl)
        self.alerts[message] = alert
        return alert

    def sweep_alerts(self, now: Optional[float] = None) -> List[str]:
        """Remove expired alerts and return their messages."""
        now = time.time() if now is None else now
        expired = [message for message, alert in self.alerts.items() if alert.is_expired(now)]
        for message in expired:
            del self.alerts[message]
        return expired

    def visible_alerts(self, now: Optional[float] = None) -> Dict[str, str]:
        now = time.time() if now is None else now
        return {message: alert.status for message, alert in self.alerts.items() if not alert.is_expired(now)}

    def set_username(self, username: Optional[str]) -> None:
        self.username = username

    def update_filter(self, filter: Optional[str]) -> None:
        self.filter = filter

    def update_freets(self, freets: List[Dict[str, Any]]) -> None:
        self.freets = freets

    def set_contact_display(self, contact_displayed: Optional[bool]) -> None:
        self.contact_displayed = contact_displayed

    def set_contact_number(self, contact_number: Optional[str]) -> None:
        self.contact_number = contact_number

    def set_contact_email(self, contact_email: Optional[str]) -> None:
        self.contact_email = contact_email

    def set_contact_website(self, contact_website: Optional[str]) -> None:
        self.contact_website = contact_website

    def set_contact_address(self, contact_address: Optional[str]) -> None:
        self.contact_address = contact_address

    def set_contact_information(self, contact_information: Dict[str, Any]) -> None:
        self.contact_information = contact_information

    def set_followers(self, followers: List[str]) -> None:
        self.followers = followers

    def set_following(self, following: List[str]) -> None:
        self.following = following

    def persist(self, path: Union[str, Path]) -> None:
        """Write a JSON snapshot of everything but the alerts."""
        Path(path).write_text(self.model_dump_json(exclude={"alerts"}), encoding="utf-8")
        logger.debug("State persisted to %s", path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "AppState":
        """Restore a snapshot written by `persist`, or a fresh state if there is none."""
        path = Path(path)
        if not path.exists():
            return cls()
        return cls.model_validate_json(path.read_text(encoding="utf-8"))


async def sweep_alerts_periodically(state: AppState, interval: Optional[float] = None) -> None:
    """Sweep expired alerts every `interval` seconds until cancelled."""
    interval = settings.ALERT_SWEEP_INTERVAL_SECONDS if interval is None else interval
    while True:
        expired = state.sweep_alerts()
        if expired:
            logger.debug("Expired alerts: %s", expired)
        await asyncio.sleep(interval)
