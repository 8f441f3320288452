import structlog
import logging
import sys
from typing import Dict, Any, List, Optional, TextIO
import os


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    service_name: str = "markov-engine",
    stream: Optional[TextIO] = None
) -> None:
    """Setup structured logging configuration

    Log records go to stderr unless another stream is given; stdout carries
    the generated walks. Values bound with structlog.contextvars (service,
    run_id, chain_id) are merged into every record.
    """

    level = getattr(logging, log_level.upper(), logging.INFO)

    # Configure Python logging; replaces handlers left by an earlier call
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=level,
        force=True
    )

    # Processors for structlog
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # Add appropriate renderer based on format
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    # Configure structlog
    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Set service name in context
    structlog.contextvars.bind_contextvars(
        service=service_name,
        environment=os.getenv("ENVIRONMENT", "development"),
        version=os.getenv("SERVICE_VERSION", "unknown")
    )


class ChainLogger:
    """Specialized logger for chain lifecycle and walk events"""

    def __init__(self, name: str):
        self.logger = structlog.get_logger(name)

    def log_chain_event(
        self,
        event_type: str,
        chain_id: str,
        data: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Log chain lifecycle events (create, configure, destroy)"""

        self.logger.info(
            "chain_event",
            event_type=event_type,
            chain_id=chain_id,
            data=data or {},
            **kwargs
        )

    def log_learning_phase(
        self,
        chain_id: str,
        driver: str,
        words_read: Optional[int] = None,
        summary: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
        success: bool = True,
        error: Optional[str] = None
    ):
        """Log the outcome of a fill (learning) phase"""

        self.logger.info(
            "learning_phase",
            chain_id=chain_id,
            driver=driver,
            words_read=words_read,
            summary=summary or {},
            duration_ms=duration_ms,
            success=success,
            error=error
        )

    def log_walk(
        self,
        chain_id: str,
        start_handle: int,
        length: int,
        status: str,
        max_length: int
    ):
        """Log a finished walk"""

        self.logger.debug(
            "walk_generated",
            chain_id=chain_id,
            start_handle=start_handle,
            length=length,
            status=status,
            max_length=max_length
        )

    def log_run_summary(self, driver: str, run_metrics: Dict[str, Any]):
        """Log the metrics gathered by one driver run"""

        self.logger.info("run_summary", driver=driver, metrics=run_metrics)


# Global logger instance
chain_logger = ChainLogger("markov_engine")


class MetricsCollector:
    """Per-run metrics: phase latencies, walk counters and registry gauges"""

    def __init__(self):
        self.latencies: Dict[str, List[float]] = {}
        self.counters: Dict[str, int] = {}
        self.gauges: Dict[str, float] = {}

    def record_latency(self, operation: str, duration_ms: float, tags: Optional[Dict[str, str]] = None):
        """Record how long one run of operation took"""

        self.latencies.setdefault(operation, []).append(duration_ms)
        chain_logger.logger.debug("metric", metric_type="latency", operation=operation,
                                  duration_ms=duration_ms, tags=tags or {})

    def increment_counter(self, name: str, value: int = 1, tags: Optional[Dict[str, str]] = None):
        self.counters[name] = self.counters.get(name, 0) + value
        chain_logger.logger.debug("metric", metric_type="counter", name=name, value=value, tags=tags or {})

    def set_gauge(self, name: str, value: float, tags: Optional[Dict[str, str]] = None):
        self.gauges[name] = value
        chain_logger.logger.debug("metric", metric_type="gauge", name=name, value=value, tags=tags or {})

    def get_metrics_summary(self) -> Dict[str, Any]:
        """Latency aggregates under latency.<operation>, then counters and gauges by name"""

        summary: Dict[str, Any] = {}
        for operation, samples in self.latencies.items():
            summary[f"latency.{operation}"] = {
                "count": len(samples),
                "avg": sum(samples) / len(samples),
                "min": min(samples),
                "max": max(samples),
            }
        summary.update(self.counters)
        summary.update(self.gauges)
        return summary

    def reset(self):
        """Drop every recorded metric"""
        self.latencies.clear()
        self.counters.clear()
        self.gauges.clear()


# Global metrics collector
metrics = MetricsCollector()
