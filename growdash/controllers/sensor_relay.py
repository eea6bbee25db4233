"""HTTP client for the sensor relay (one latest sample per metric topic)"""

import asyncio
import logging
import math
import re
from typing import Any, Dict, Mapping, Optional

import aiohttp
from aiohttp import ClientTimeout

from ..exceptions import ParseError, TransportError
from ..models import MetricId, SensorReading
from .. import config

logger = logging.getLogger(__name__)

# Leading numeric prefix, trailing junk ignored ("23.5C" -> 23.5)
_LEADING_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_reading_value(raw: Any) -> float:
    """Parse a relay message into a finite float.

    Raises:
        ParseError: if there is no numeric prefix or the number is not finite
    """
    if raw is None:
        raise ParseError("empty message")
    match = _LEADING_FLOAT_RE.match(str(raw))
    if not match:
        raise ParseError(f"not a number: {raw!r}")
    value = float(match.group(1))
    if not math.isfinite(value):
        raise ParseError(f"not finite: {raw!r}")
    return value


class SensorRelayClient:
    """Fetch the newest reading of a metric from the relay"""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        uid: Optional[str] = None,
        base_url: Optional[str] = None,
        topics: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ):
        self._session = session
        self.uid = uid if uid is not None else config.RELAY_UID
        self.base_url = base_url or config.RELAY_BASE_URL
        self.topics = dict(topics or config.METRIC_TOPICS)
        self._timeout = ClientTimeout(total=timeout or config.FETCH_TIMEOUT_SECONDS)

    def topic_for(self, metric: MetricId) -> str:
        metric = MetricId(metric)
        return self.topics.get(metric.value, metric.value)

    async def fetch_latest(self, metric: MetricId) -> SensorReading:
        """Fetch the latest sample for `metric`.

        Raises:
            TransportError: on non-2xx status, network failure, timeout or a
                malformed response envelope
        """
        topic = self.topic_for(metric)
        params = {"uid": self.uid, "topic": topic, "type": 1, "num": 1}

        try:
            async with self._session.get(self.base_url, params=params, timeout=self._timeout) as resp:
                if not 200 <= resp.status < 300:
                    raise TransportError(f"HTTP {resp.status}")
                try:
                    payload = await resp.json(content_type=None)
                except ValueError as err:
                    raise TransportError(f"Malformed response for topic {topic}: {err}") from err
        except asyncio.TimeoutError as err:
            raise TransportError(f"Timeout fetching topic {topic}") from err
        except aiohttp.ClientError as err:
            raise TransportError(f"Request failed for topic {topic}: {err}") from err

        item = self._latest_item(payload, topic)
        return self._to_reading(item, topic)

    @staticmethod
    def _latest_item(payload: Any, topic: str) -> Optional[Dict[str, Any]]:
        if not isinstance(payload, dict):
            raise TransportError(f"Malformed response for topic {topic}: expected object")
        data = payload.get("data")
        if data is None:
            return None
        if not isinstance(data, list):
            raise TransportError(f"Malformed response for topic {topic}: 'data' is not a list")
        if not data:
            return None
        item = data[0]
        if not isinstance(item, dict):
            raise TransportError(f"Malformed response for topic {topic}: sample is not an object")
        return item

    @staticmethod
    def _to_reading(item: Optional[Dict[str, Any]], topic: str) -> SensorReading:
        if item is None:
            return SensorReading.empty()

        try:
            value = parse_reading_value(item.get("msg"))
        except ParseError as e:
            logger.debug(f"Topic {topic} returned non-numeric value: {e}")
            value = None

        unix = item.get("unix")
        if isinstance(unix, bool) or not isinstance(unix, (int, float)):
            unix = None

        return SensorReading(
            value=value,
            time=str(item.get("time") or ""),
            unix=int(unix) if unix is not None else None,
        )
