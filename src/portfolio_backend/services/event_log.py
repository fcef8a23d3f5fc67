"""Audit logging to category-specific JSON-line files.

Each category (contact attempts, page visits, application errors and
security events) is written to its own append-only file inside the
configured log directory. Files are rotated by size, and client IPs can be
anonymized before they are written.

Logging is best effort: failures are reported to the console logger and
never propagate to the caller.
"""

from __future__ import annotations

import json
import logging
import re
import traceback
from pathlib import Path
from threading import Lock
from typing import Any, Final, Literal

from portfolio_backend.db.time import isoformat_utc, utcnow

logger = logging.getLogger(__name__)

CONTACT_LOG: Final[str] = "contact.log"
ACCESS_LOG: Final[str] = "access.log"
ERROR_LOG: Final[str] = "error.log"
SECURITY_LOG: Final[str] = "security.log"

DEFAULT_MAX_BYTES: Final[int] = 10 * 1024 * 1024
MAX_STACK_LINES: Final[int] = 5

LogLevel = Literal["info", "warn", "error"]
SecurityEventType = Literal["rate_limit", "spam_detected", "honeypot_triggered", "suspicious_activity"]

_TIMESTAMP_UNSAFE: Final[re.Pattern[str]] = re.compile(r"[:.+]")


def anonymize_ip(ip: str, enabled: bool = True) -> str:
    """Mask the host part of an IP address.

    IPv6 keeps the first four groups, IPv4 the first two octets.
    """
    if not enabled:
        return ip
    if ":" in ip:
        return ":".join(ip.split(":")[:4]) + ":xxxx:xxxx:xxxx:xxxx"
    return ".".join(ip.split(".")[:2]) + ".xxx.xxx"


def extract_browser(user_agent: str) -> str:
    """Return a coarse browser label from a User-Agent string."""
    if "Chrome" in user_agent and "Edg" not in user_agent:
        return "Chrome"
    if "Safari" in user_agent and "Chrome" not in user_agent:
        return "Safari"
    if "Firefox" in user_agent:
        return "Firefox"
    if "Edg" in user_agent:
        return "Edge"
    if "Opera" in user_agent or "OPR" in user_agent:
        return "Opera"
    return "Unknown"


def extract_platform(user_agent: str) -> str:
    """Return a coarse operating system label from a User-Agent string."""
    if "Windows" in user_agent:
        return "Windows"
    if "Mac OS X" in user_agent or "Macintosh" in user_agent:
        return "macOS"
    if "Linux" in user_agent:
        return "Linux"
    if "Android" in user_agent:
        return "Android"
    if "iPhone" in user_agent or "iPad" in user_agent:
        return "iOS"
    return "Unknown"


def rotated_path(path: Path, timestamp: str | None = None) -> Path:
    """Return the name a log file is moved to when it is rotated."""
    stamp = timestamp or _TIMESTAMP_UNSAFE.sub("-", utcnow().isoformat())
    return path.with_name(f"{path.stem}-{stamp}{path.suffix}")


class EventLogService:
    """Writes structured audit entries to rotating category log files."""

    def __init__(
        self,
        log_dir: Path | str,
        *,
        max_bytes: int = DEFAULT_MAX_BYTES,
        anonymize_ips: bool = False,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.max_bytes = max_bytes
        self.anonymize_ips = anonymize_ips
        self._lock = Lock()
        self._closed = False

    def open(self) -> None:
        """Create the log directory; failures are reported but not raised."""
        self._closed = False
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Failed to create log directory %s: %s", self.log_dir, exc)

    def close(self) -> None:
        """Stop accepting entries once any in-flight write has finished."""
        with self._lock:
            self._closed = True

    def path_for(self, filename: str) -> Path:
        return self.log_dir / filename

    # --- Entry points ---------------------------------------------------------------
    def log_contact_attempt(
        self,
        ip: str,
        success: bool,
        *,
        reason: str | None = None,
        email: str | None = None,
        spam: bool | None = None,
        rate_limited: bool | None = None,
        duplicate: bool | None = None,
    ) -> None:
        """Record the outcome of a contact form submission."""
        self._write(
            CONTACT_LOG,
            level="info" if success else "warn",
            type_="contact_form",
            message=(
                "Contact form submitted successfully"
                if success
                else "Contact form submission failed"
            ),
            data={
                "ip": self._ip(ip),
                "success": success,
                "reason": reason,
                "email": email,
                "spam": spam,
                "rate_limited": rate_limited,
                "duplicate": duplicate,
            },
        )

    def log_page_visit(
        self,
        ip: str,
        path: str,
        *,
        user_agent: str | None = None,
        referer: str | None = None,
        method: str | None = None,
    ) -> None:
        """Record a page visit with a parsed browser/platform label."""
        ua = user_agent or ""
        self._write(
            ACCESS_LOG,
            level="info",
            type_="page_visit",
            message="Page visited",
            data={
                "ip": self._ip(ip),
                "path": path,
                "method": method or "GET",
                "browser": extract_browser(ua),
                "platform": extract_platform(ua),
                "user_agent": ua,
                "referer": referer,
            },
        )

    def log_error(self, error: BaseException, context: dict[str, Any] | None = None) -> None:
        """Record an application error with a truncated stack trace."""
        stack_lines = "".join(traceback.format_exception(error)).splitlines()
        context = dict(context or {})
        if isinstance(context.get("ip"), str):
            context["ip"] = self._ip(context["ip"])
        self._write(
            ERROR_LOG,
            level="error",
            type_="application_error",
            message=str(error) or type(error).__name__,
            data={
                "stack": "\n".join(stack_lines[:MAX_STACK_LINES]),
                **context,
            },
        )

    def log_security_event(
        self,
        ip: str,
        event: SecurityEventType,
        details: str | None = None,
    ) -> None:
        """Record a security-relevant event such as a tripped honeypot."""
        self._write(
            SECURITY_LOG,
            level="warn",
            type_="security",
            message=f"Security event: {event}",
            data={
                "ip": self._ip(ip),
                "event": event,
                "details": details,
            },
        )

    # --- Internals ------------------------------------------------------------------
    def _ip(self, ip: str) -> str:
        return anonymize_ip(ip, enabled=self.anonymize_ips)

    def _rotate_if_needed(self, path: Path) -> None:
        if path.exists() and path.stat().st_size > self.max_bytes:
            path.rename(rotated_path(path))

    def _write(
        self,
        filename: str,
        *,
        level: LogLevel,
        type_: str,
        message: str,
        data: dict[str, Any],
    ) -> None:
        entry = {
            "timestamp": isoformat_utc(),
            "level": level,
            "type": type_,
            "message": message,
            "data": {key: value for key, value in data.items() if value is not None},
        }
        path = self.path_for(filename)
        try:
            line = json.dumps(entry, default=str) + "\n"
            with self._lock:
                if self._closed:
                    return
                self._rotate_if_needed(path)
                with path.open("a", encoding="utf-8") as handle:
                    handle.write(line)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write %s entry: %s", filename, exc)
