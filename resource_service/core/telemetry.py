"""
OpenTelemetry Instrumentation for FastAPI

Creates spans for local operations; trace context propagation and OTLP
export are handled by the Dapr sidecar.
"""

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor

from resource_service.core.logger import logger


def instrument_app(app) -> bool:
    """
    Instrument FastAPI application with OpenTelemetry for automatic span creation.

    Args:
        app: FastAPI application instance

    Returns:
        Whether instrumentation succeeded; failures never stop the service
    """
    try:
        FastAPIInstrumentor.instrument_app(app)

        httpx_instrumentor = HTTPXClientInstrumentor()
        if not httpx_instrumentor.is_instrumented_by_opentelemetry:
            httpx_instrumentor.instrument()

        pymongo_instrumentor = PymongoInstrumentor()
        if not pymongo_instrumentor.is_instrumented_by_opentelemetry:
            pymongo_instrumentor.instrument()

        logger.info("OpenTelemetry instrumentation complete (trace export handled by Dapr)")
        return True

    except Exception as e:
        logger.error(f"Failed to instrument application: {e}", error=e)
        return False
