from __future__ import annotations

import logging

from dlcity.core.config import settings
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)


def init_otel(app: FastAPI) -> bool:
    """Install tracing for inbound requests and outbound upstream calls.

    Returns False when OTEL_ENABLED is off.
    """
    if not settings.otel_enabled:
        return False

    resource = Resource.create({"service.name": settings.api_name})
    provider = TracerProvider(resource=resource)

    endpoint = settings.otel_otlp_endpoint
    exporter = OTLPSpanExporter(endpoint=endpoint) if endpoint else OTLPSpanExporter()

    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app)
    # One client span per center fetch, each from its own worker thread.
    HTTPXClientInstrumentor().instrument()
    logger.info("OpenTelemetry tracing enabled (endpoint=%s)", endpoint)
    return True
