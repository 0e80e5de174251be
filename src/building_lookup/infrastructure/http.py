"""Requests-backed JSON session for remote row sources.

Usage example:
    import requests

    from building_lookup.infrastructure.http import RequestsJsonSession
    from building_lookup.infrastructure.resilience import RetryPolicy

    session = RequestsJsonSession(
        session=requests.Session(),
        retry_policy=RetryPolicy(max_retries=2),
        timeout_seconds=10.0,
    )
    payload = session.get_json("https://example.org/buildings.json")
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import override

import requests

from ..exceptions import LoadShapeFailure, LoadTransportFailure
from ..observability import get_logger
from ..protocols import HttpSession, RetryPolicy
from .resilience import RetryPolicy as RetryPolicyImpl

logger = get_logger("building_lookup.infrastructure.http")


def parse_retry_after(headers: Mapping[str, str] | None) -> int | None:
    """Parse Retry-After header into seconds, if available."""
    if not headers:
        return None
    value = headers.get("Retry-After")
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        dt = parsedate_to_datetime(value)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        delta = (dt - datetime.now(UTC)).total_seconds()
        return max(0, int(delta))
    except (AttributeError, OverflowError, TypeError, ValueError):
        return None


def _response_details(response: requests.Response) -> str:
    """Return a compact body summary for error reporting."""
    try:
        body = response.text
    except (UnicodeDecodeError, ValueError, requests.RequestException):
        body = "<unreadable>"
    body = " ".join(str(body).split())
    if len(body) > 300:
        body = body[:300] + "..."
    return body or "<empty>"


class RequestsJsonSession(HttpSession):
    """JSON GET with retries on transient failures.

    - Timeouts and connection errors retry with exponential backoff
    - Retryable statuses (429, 5xx) retry, honouring Retry-After
    - Any other non-2xx status fails immediately
    - Every failure surfaces as LoadTransportFailure; an undecodable body
      as LoadShapeFailure
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        retry_policy: RetryPolicy | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.session = session or requests.Session()
        self.retry_policy = retry_policy or RetryPolicyImpl()
        self.timeout_seconds = timeout_seconds

    @override
    def get_json(self, url: str) -> object:
        attempt = 0
        while True:
            try:
                r = self.session.get(url, timeout=self.timeout_seconds)
            except self.retry_policy.retry_exceptions as exc:
                if attempt < self.retry_policy.max_retries:
                    delay = self.retry_policy.compute_backoff(attempt)
                    logger.warning(
                        "Request to %s failed (%s); retrying in %.2fs", url, exc, delay
                    )
                    time.sleep(delay)
                    attempt += 1
                    continue
                raise LoadTransportFailure.for_request_error(exc) from exc
            except requests.RequestException as exc:
                raise LoadTransportFailure.for_request_error(exc) from exc

            if r.status_code in self.retry_policy.retry_statuses:
                if attempt < self.retry_policy.max_retries:
                    retry_after = parse_retry_after(getattr(r, "headers", None))
                    delay = self.retry_policy.compute_backoff(attempt, retry_after)
                    logger.warning(
                        "Row source returned %s; retrying in %.2fs", r.status_code, delay
                    )
                    time.sleep(delay)
                    attempt += 1
                    continue
                raise LoadTransportFailure.for_status(r.status_code, _response_details(r))

            if not 200 <= r.status_code < 300:
                raise LoadTransportFailure.for_status(r.status_code, _response_details(r))

            try:
                return r.json()
            except ValueError as exc:
                raise LoadShapeFailure.for_invalid_json() from exc
