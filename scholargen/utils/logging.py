"""Structured logging for diagram render attempts."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredRenderLogger:
    """Structured logger for diagram rendering."""

    def log_attempt(
        self,
        *,
        target_id: str,
        engine: str,
        outcome: str,
        latency_ms: float,
        source_chars: int,
        error_reason: str | None = None,
    ) -> None:
        """Log diagram render attempt with structured data."""
        log_data: dict[str, Any] = {
            "target_id": target_id,
            "engine": engine,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "source_chars": source_chars,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Diagram render: {target_id} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_stale(self, *, target_id: str, generation: int, latest_generation: int) -> None:
        """Log a render result discarded in favour of a newer one."""
        logger.debug(
            f"Discarding stale diagram render {target_id}",
            extra={
                "structured": {
                    "target_id": target_id,
                    "generation": generation,
                    "latest_generation": latest_generation,
                }
            },
        )
