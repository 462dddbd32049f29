"""OpenTelemetry tracing helpers for judgesync.

Provides a thin wrapper around the OpenTelemetry API so the sync core can
call ``get_tracer()`` without caring whether the SDK is installed.  When the
SDK is *not* configured the API returns no-op implementations, so restores,
persists and submissions carry no tracing cost unless explicitly opted in.

Usage::

    from judgesync.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("judgesync.persist") as span:
        span.set_attribute(ATTR_LANGUAGE, key.language)

To activate real tracing, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install judgesync[otel]``).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from judgesync.core.buffers.models import BufferKey

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout judgesync instrumentation
# ---------------------------------------------------------------------------

ATTR_LANGUAGE = "judgesync.language"
ATTR_PROBLEM_ID = "judgesync.problem_id"
ATTR_CONTEST_ID = "judgesync.contest_id"
ATTR_OUTCOME = "judgesync.outcome"
ATTR_CONTENT_LENGTH = "judgesync.content.length"
ATTR_SUBMISSION_ID = "judgesync.submission.id"

_INSTRUMENTATION_NAME = "judgesync"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def set_key_attributes(span: trace.Span, key: BufferKey) -> None:
    """Tag *span* with the language and problem of a buffer key."""
    span.set_attribute(ATTR_LANGUAGE, key.language)
    span.set_attribute(ATTR_PROBLEM_ID, key.problem_id)


def configure_telemetry(
    *,
    service_name: str = "judgesync",
    console: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider for judgesync spans.

    Console export writes one JSON document per span to *stderr*: commands
    such as ``snapshot pull`` print buffer content on stdout and must stay
    pipeable.  With neither *console* nor *otlp_endpoint* spans are recorded
    but not exported.

    Raises:
        ImportError: ``judgesync[otel]`` is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        raise ImportError(_missing_extra("opentelemetry-sdk")) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))
    trace.set_tracer_provider(provider)


def _otlp_exporter(endpoint: str) -> object:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        raise ImportError(_missing_extra("opentelemetry-exporter-otlp")) from exc
    return OTLPSpanExporter(endpoint=endpoint)


def _missing_extra(package: str) -> str:
    return f"{package} is required for judgesync tracing; install it with: pip install judgesync[otel]"
