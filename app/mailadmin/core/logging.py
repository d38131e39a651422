from __future__ import annotations

import json
import logging


def configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def log_json(logger: logging.Logger, payload: dict) -> None:
    logger.info(json.dumps(payload, ensure_ascii=False, default=str))


def log_action(
    logger: logging.Logger,
    *,
    action: str,
    actor: str | None,
    entity_id: str | None,
    trace_id: str | None,
    result: str,
    metadata: dict | None = None,
) -> None:
    log_json(
        logger,
        {
            "event": "admin_action",
            "action": action,
            "actor": actor,
            "entity_id": entity_id,
            "trace_id": trace_id,
            "result": result,
            "metadata": metadata,
        },
    )
