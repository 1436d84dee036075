import logging
import structlog
import sys

from app.core.config import settings

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

# Configure standard logging - Console only, no file logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class RequestLogger:
    """Logger for cube API requests with a fixed set of fields"""

    def __init__(self, name: str = "cube_api"):
        self.logger = get_logger(name)

    def moves_applied(self, endpoint: str, move_count: int, quarter_turns: int):
        """Log a request that applied moves to a cube"""
        self.logger.info(
            f"{endpoint}: applied {move_count} moves",
            event_type="moves_applied",
            endpoint=endpoint,
            move_count=move_count,
            quarter_turns=quarter_turns
        )

    def solve_finished(self, length: int, elapsed_ms: int):
        """Log a finished solver call - slow solves are warned about"""
        message = f"Solver returned {length} moves in {elapsed_ms}ms"
        if elapsed_ms > 1000:
            self.logger.warning(message, event_type="solve", length=length, elapsed_ms=elapsed_ms)
        else:
            self.logger.info(message, event_type="solve", length=length, elapsed_ms=elapsed_ms)
