# src/pnl_cards/api/metrics.py

# --- Built Ins  ---
import time
from typing import Callable


class RequestMetrics:
    """
    Request counters for one running application.
    Owned by the aiohttp app; the card pipeline never sees it.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.start_time = clock()
        self.requests = 0
        self.errors = 0
        self.latency_sum_ms = 0.0
        self.latency_count = 0

    def record_request(self) -> None:
        self.requests += 1

    def record_response(self, status: int, duration_ms: float) -> None:
        self.latency_sum_ms += duration_ms
        self.latency_count += 1
        if status >= 400:
            self.errors += 1

    def uptime_seconds(self) -> float:
        return self._clock() - self.start_time

    def snapshot(self) -> dict:
        uptime = self.uptime_seconds()
        avg_latency = round(self.latency_sum_ms / self.latency_count) if self.latency_count else 0
        error_rate = round(self.errors / self.requests * 100, 2) if self.requests else 0.0
        per_minute = round(self.requests / (uptime / 60)) if self.requests and uptime > 0 else 0
        return {
            "uptime_seconds": round(uptime),
            "total_requests": self.requests,
            "total_errors": self.errors,
            "error_rate_percent": error_rate,
            "avg_latency_ms": avg_latency,
            "requests_per_minute": per_minute,
        }
