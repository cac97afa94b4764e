"""Logfire wiring for hosts that load the MemOS memory tools.

Operations and the API client emit logfire spans on their own; this only
decides where they go. Call configure() once at host startup.
"""

import logging

import logfire

# Chatty per-request loggers; the httpx instrumentation already traces each call
NOISY_LOGGERS = ("httpx", "httpcore")


def configure(service_name: str = "memos_memory", level: str = "INFO") -> None:
    """Send spans to Logfire (when a token is present) and route stdlib logging there.

    Args:
        service_name: Name to identify this host in traces.
        level: Log level name for the root logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logfire.configure(
        service_name=service_name,
        distributed_tracing=True,
        scrubbing=False,  # Memory content mentioning "secret" or "session" would be redacted
        send_to_logfire="if-token-present",
    )
    logging.basicConfig(handlers=[logfire.LogfireLoggingHandler()], level=numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Puts the MemOS round-trips inside the memos.* operation spans
    logfire.instrument_httpx()
