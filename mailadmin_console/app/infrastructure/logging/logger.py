import json
import logging
from datetime import datetime, timezone


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    actor: str | None,
    trace_id: str | None,
    outcome: str,
    detail: str | None = None,
) -> None:
    level = logging.INFO if outcome == "success" else logging.ERROR
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "module": module,
                "action": action,
                "actor": actor,
                "trace_id": trace_id,
                "outcome": outcome,
                "detail": detail,
            }
        ),
    )
