"""Structlog setup for the review sentiment service.

Every record, ours or from third-party stdlib loggers, passes through the
same processor chain and leaves on stdout: one JSON object per line in
production, a colored console line elsewhere. Values under credential-like
keys and Hugging Face tokens embedded in messages are masked before
rendering.
"""

import logging
import re
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "review-sentiment"

# Download progress and per-request transport chatter
NOISY_LOGGERS = (
    "asyncio",
    "httpcore",
    "httpx",
    "huggingface_hub",
    "transformers",
    "urllib3",
)

SECRET_KEYS = frozenset({"token", "hf_token", "credential", "authorization", "password"})
HF_TOKEN_PATTERN = re.compile(r"\bhf_[A-Za-z0-9]{6,}")
MASK = "***"


def add_service_name(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def redact_secrets(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask credential values so stored tokens never reach log output."""
    for key, value in event_dict.items():
        if key.lower() in SECRET_KEYS and value is not None:
            event_dict[key] = MASK
        elif isinstance(value, str):
            event_dict[key] = HF_TOKEN_PATTERN.sub(MASK, value)
    return event_dict


def build_processors(json_output: bool) -> list[Processor]:
    """Processor chain shared by structlog and foreign stdlib records."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_name,
        redact_secrets,
    ]
    if json_output:
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Install the stdout handler and route structlog through it.

    Args:
        log_level: Root level name; unknown names fall back to INFO
        environment: "production" selects JSON lines, anything else the
            console renderer
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    json_output = environment.lower() == "production"
    processors = build_processors(json_output)

    renderer: Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=processors,
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.get_logger(__name__).info(
        "Logging configured",
        level=logging.getLevelName(level),
        renderer="json" if json_output else "console",
    )
