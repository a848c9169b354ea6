"""
NASA FIRMS Active Fire Service

Fetches satellite hotspot detections for a bounding box from the FIRMS
area API and normalises them into FireDetection records.
"""

import csv
import io
import logging
import math
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Tuple

import httpx
from pydantic import ValidationError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from config import get_settings
from schemas.common import Bounds
from schemas.fire import FireDetection, FireFetchResult
from services.exceptions import FireDataUnavailable, describe_http_error

logger = logging.getLogger(__name__)
settings = get_settings()


class FirmsFireDataService:
    """Stateless client for NASA FIRMS API calls."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        source: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.firms_api_key
        self.base_url = base_url or settings.firms_api_url
        self.source = source or settings.firms_source
        self.day_range = settings.firms_day_range
        self.timeout = settings.external_api_timeout_seconds
        self._transport = transport

    async def get_active_fires(self, bounds: Bounds) -> FireFetchResult:
        """
        Get active fire detections inside `bounds`.

        Never raises: on missing credentials or a failed request the result
        has `available=False`, no fires and the reason in `error`.
        """
        try:
            body = await self._make_request(bounds)
        except FireDataUnavailable as e:
            logger.error(f"Fire data unavailable: {e.message}")
            return FireFetchResult(fires=[], available=False, error=e.message, source=self.source)
        except httpx.HTTPError as e:
            reason = f"NASA FIRMS request failed: {describe_http_error(e)}"
            logger.error(f"Fire data unavailable: {reason}")
            return FireFetchResult(fires=[], available=False, error=reason, source=self.source)

        fires, dropped = self.parse_fire_csv(body)
        if dropped:
            logger.warning(f"Dropped {dropped} FIRMS rows with invalid coordinates")
        logger.info(f"Fetched {len(fires)} active fires for area {bounds.as_area()}")

        return FireFetchResult(fires=fires, available=True, source=self.source, rows_dropped=dropped)

    @staticmethod
    def parse_fire_csv(body: str) -> Tuple[List[FireDetection], int]:
        """
        Parse a FIRMS CSV payload.

        Rows with missing, non-numeric, NaN or out-of-range coordinates are
        dropped. Returns the detections and the number of rows dropped.
        """
        fires: List[FireDetection] = []
        dropped = 0

        reader = csv.DictReader(io.StringIO(body.strip()))
        for row in reader:
            fire = _row_to_detection(row)
            if fire is None:
                dropped += 1
            else:
                fires.append(fire)

        return fires, dropped

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        reraise=True,
    )
    async def _make_request(self, bounds: Bounds) -> str:
        """Make an authenticated GET request to the FIRMS area API."""
        if not self.api_key:
            raise FireDataUnavailable("NASA FIRMS API key is not configured")

        url = f"{self.base_url}/{self.api_key}/{self.source}/{bounds.as_area()}/{self.day_range}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(url)
            response.raise_for_status()
            body = response.text

        # FIRMS reports bad keys and malformed areas as plain text with a 200
        if not body.lstrip().lower().startswith("latitude"):
            if not body.strip():
                return ""
            message = body.strip().splitlines()[0][:200]
            logger.error(f"NASA FIRMS API error: {message}")
            raise FireDataUnavailable(f"NASA FIRMS API error: {message}")

        return body


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None or str(value).strip() == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _row_to_detection(row: Dict[str, Any]) -> Optional[FireDetection]:
    lat = _parse_float(row.get("latitude"))
    lon = _parse_float(row.get("longitude"))
    if lat is None or lon is None:
        return None

    brightness = _parse_float(row.get("bright_ti4")) or _parse_float(row.get("brightness"))
    confidence = (row.get("confidence") or "").strip()

    try:
        return FireDetection(
            latitude=lat,
            longitude=lon,
            confidence=confidence or settings.default_fire_confidence,
            date=(row.get("acq_date") or "").strip() or datetime.now(timezone.utc).isoformat(),
            brightness=brightness if brightness is not None else settings.default_fire_brightness,
            scan=_parse_float(row.get("scan")),
            track=_parse_float(row.get("track")),
            satellite=(row.get("satellite") or "").strip() or None,
            acq_time=(row.get("acq_time") or "").strip() or None,
            frp=_parse_float(row.get("frp")),
            daynight=(row.get("daynight") or "").strip() or None,
        )
    except ValidationError:
        return None
