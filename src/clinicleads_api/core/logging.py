from __future__ import annotations

import logging
import sys

import structlog

from clinicleads_api.config.settings import Settings

# Attributes every stdlib LogRecord carries; anything else arrived through ``extra=``.
_RESERVED_RECORD_ATTRS = frozenset(
    set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__)
    | {"message", "asctime", "_logger", "_name", "_from_structlog"}
)


def _merge_record_extra(
    _: object, __: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Lift ``extra=`` fields from stdlib records into the structured event."""

    record = event_dict.get("_record")
    if record is None:
        return event_dict
    for key, value in record.__dict__.items():
        if key not in _RESERVED_RECORD_ATTRS and key not in event_dict:
            event_dict[key] = value
    return event_dict


def configure_logging(settings: Settings) -> None:
    """Configure structlog and route stdlib records through the same renderer."""

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.log_json:
        final_processor: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            final_processor,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                *shared_processors,
                structlog.stdlib.add_logger_name,
                _merge_record_extra,
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                final_processor,
            ],
        )
    )
    logging.basicConfig(
        level=settings.log_level,
        handlers=[handler],
        force=True,
    )


__all__ = ["configure_logging"]
