"""Note search MCP server."""

import asyncio
import base64
import json
import logging
import os
import signal
import uuid
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.server.dependencies import get_http_request
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from starlette.requests import Request

from backends.events import CompositeObserver, LoggingObserver, TracingObserver
from backends.formatter import serialize
from core import PromptManager
from servers.notesearch.config import SearchConfig
from servers.notesearch.service import NoteSearchService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

load_dotenv()


class ServerConfig:
    """Server configuration."""

    def __init__(self) -> None:
        """Initialize server configuration."""
        self.sse_port = int(os.getenv("MCP_SSE_PORT", "8000"))
        self.streamable_http_port = int(os.getenv("MCP_STREAMABLE_HTTP_PORT", "8080"))

        # Langfuse configuration (optional)
        self.langfuse_enabled = os.getenv("LANGFUSE_ENABLED", "false").lower() == "true"
        if self.langfuse_enabled:
            self.langfuse_public_key = self._get_required_env("LANGFUSE_PUBLIC_KEY")
            self.langfuse_secret_key = self._get_required_env("LANGFUSE_SECRET_KEY")
            self.langfuse_host = self._get_required_env("LANGFUSE_HOST")
        else:
            self.langfuse_public_key = ""
            self.langfuse_secret_key = ""
            self.langfuse_host = ""

        self.search = SearchConfig()

    @staticmethod
    def _get_required_env(key: str) -> str:
        """Get required environment variable or raise descriptive error."""
        value = os.getenv(key)
        if not value:
            raise ValueError(f"Required environment variable {key} is not set")
        return value


class TelemetryManager:
    """Telemetry manager for Langfuse integration."""

    def __init__(self, config: ServerConfig) -> None:
        """Initialize telemetry manager."""
        self.config = config
        self.enabled = config.langfuse_enabled
        if self.enabled:
            self._setup_telemetry()

    def _setup_telemetry(self) -> None:
        """Export spans to Langfuse over OTLP."""
        langfuse_auth = base64.b64encode(
            f"{self.config.langfuse_public_key}:{self.config.langfuse_secret_key}".encode()
        ).decode()

        os.environ["OTEL_EXPORTER_OTLP_HEADERS"] = f"Authorization=Basic {langfuse_auth}"
        os.environ["OTEL_EXPORTER_OTLP_ENDPOINT"] = (
            f"{self.config.langfuse_host}/api/public/otel"
        )

        trace_provider = TracerProvider()
        trace_provider.add_span_processor(SimpleSpanProcessor(OTLPSpanExporter()))
        trace.set_tracer_provider(trace_provider)

    @staticmethod
    def get_tracer(name: str) -> trace.Tracer:
        """Get tracer instance."""
        return trace.get_tracer(name)


config = ServerConfig()
telemetry = TelemetryManager(config)
tracer = telemetry.get_tracer("notesearch-mcp")

observer = CompositeObserver(LoggingObserver(logger), TracingObserver())
search_service = NoteSearchService(config=config.search, observer=observer)
logger.info(
    f"Searching {config.search.notes_directory} with the {config.search.search_backend} backend"
)

prompt_manager = PromptManager()
SEARCH_NOTES_DESCRIPTION = prompt_manager.render_prompt(
    "tools.search_notes",
    max_terms=config.search.max_terms,
    max_results=config.search.max_results_per_term,
    context_lines=config.search.default_context_lines,
)

server = FastMCP(sse_path="/notesearch/sse", message_path="/notesearch/messages/")

_shutdown_requested = False


def signal_handler(sig: int, frame: Any) -> None:
    """Handle termination signals for graceful shutdown."""
    global _shutdown_requested
    logger.info(f"Received signal {sig}, initiating graceful shutdown...")
    _shutdown_requested = True


def _trace_id() -> str:
    try:
        request: Request = get_http_request()
        return str(request.headers.get("X-TRACE-ID", uuid.uuid4()))
    except Exception:
        return str(uuid.uuid4())


def _set_span_attributes(
    span: trace.Span,
    input_data: Dict[str, Any],
    output_data: Dict[str, Any],
    session_id: str,
) -> None:
    """Set span attributes for telemetry."""
    if not telemetry.enabled:
        return
    try:
        span.set_attribute("langfuse.session.id", session_id)
        span.set_attribute("langfuse.tags", ["notesearch-mcp"])
        span.set_attribute("input", json.dumps(input_data))
        span.set_attribute("output", json.dumps(output_data))
    except Exception as exc:
        logger.error(f"Error setting span attributes: {exc}")


@server.tool(description=SEARCH_NOTES_DESCRIPTION)
def search_notes(terms: Union[str, List[str]], context_lines: Optional[int] = None) -> str:
    """Search notes for each term and return matching snippets grouped by file."""
    if _shutdown_requested:
        logger.info("Shutdown in progress, declining new requests")
        return "Server is shutting down"

    logger.info(f"Search terms: {terms}")
    with tracer.start_as_current_span("NoteSearchMcp:search_notes") as span:
        result = search_service.search(terms, context_lines)

        if isinstance(result, str):
            output_data = {"error": result}
        else:
            output_data = {"files": list(result.keys())}
        _set_span_attributes(
            span,
            input_data={"terms": terms, "context_lines": context_lines},
            output_data=output_data,
            session_id=_trace_id(),
        )

    if isinstance(result, str):
        return result
    return serialize(result)


@server.tool()
def search_notes_guide() -> str:
    """Return tips for writing effective note search terms."""
    return prompt_manager.render_prompt(
        "tools.search_notes_guide", directory=config.search.notes_directory
    )


async def _run_server() -> None:
    """Run the FastMCP server with both HTTP and SSE transports."""
    tasks = [
        server.run_http_async(
            transport="streamable-http",
            host="0.0.0.0",
            path="/notesearch/mcp",
            port=config.streamable_http_port,
        ),
        server.run_http_async(transport="sse", host="0.0.0.0", port=config.sse_port),
    ]
    await asyncio.gather(*tasks)


def main() -> None:
    """Main entry point."""
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        logger.info("Starting Note Search MCP server...")
        asyncio.run(_run_server())
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt (CTRL+C)")
    except Exception as exc:
        logger.error(f"Server error: {exc}")
        raise
    finally:
        logger.info("Server has shut down.")


if __name__ == "__main__":
    main()
