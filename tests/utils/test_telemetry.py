"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest
from opentelemetry import trace

from judgesync.core.buffers.models import BufferKey
from judgesync.utils.telemetry import (
    ATTR_LANGUAGE,
    ATTR_PROBLEM_ID,
    configure_telemetry,
    get_tracer,
    set_key_attributes,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        tracer = get_tracer("test.module")
        assert isinstance(tracer, trace.Tracer)

    def test_default_name(self) -> None:
        tracer = get_tracer()
        assert isinstance(tracer, trace.Tracer)

    def test_noop_span(self) -> None:
        """Without SDK configured, spans should be no-ops."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("judgesync.persist") as span:
            set_key_attributes(span, BufferKey(language="python", problem_id=1))


class TestSetKeyAttributes:
    def test_sets_language_and_problem(self) -> None:
        span = MagicMock()
        set_key_attributes(span, BufferKey(language="cpp", problem_id=9))
        span.set_attribute.assert_any_call(ATTR_LANGUAGE, "cpp")
        span.set_attribute.assert_any_call(ATTR_PROBLEM_ID, 9)


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        """configure_telemetry requires opentelemetry-sdk."""
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_installs_sdk_provider(self) -> None:
        sdk_trace = pytest.importorskip("opentelemetry.sdk.trace")

        with patch("judgesync.utils.telemetry.trace.set_tracer_provider") as set_provider:
            configure_telemetry(service_name="test-svc")

        provider = set_provider.call_args.args[0]
        assert isinstance(provider, sdk_trace.TracerProvider)
        assert provider.resource.attributes["service.name"] == "test-svc"

    def test_console_export_is_off_by_default(self) -> None:
        pytest.importorskip("opentelemetry.sdk.trace")

        with (
            patch("opentelemetry.sdk.trace.export.ConsoleSpanExporter") as exporter,
            patch("judgesync.utils.telemetry.trace.set_tracer_provider"),
        ):
            configure_telemetry()

        exporter.assert_not_called()

    def test_console_export_writes_to_stderr(self) -> None:
        pytest.importorskip("opentelemetry.sdk.trace")

        with (
            patch("opentelemetry.sdk.trace.export.ConsoleSpanExporter") as exporter,
            patch("judgesync.utils.telemetry.trace.set_tracer_provider"),
        ):
            configure_telemetry(console=True)

        exporter.assert_called_once_with(out=sys.stderr)

    def test_otlp_raises_without_exporter(self) -> None:
        pytest.importorskip("opentelemetry.sdk.trace")

        with (
            patch.dict(
                "sys.modules",
                {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
            ),
            patch("judgesync.utils.telemetry.trace.set_tracer_provider") as set_provider,
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(otlp_endpoint="http://localhost:4317")

        set_provider.assert_not_called()
