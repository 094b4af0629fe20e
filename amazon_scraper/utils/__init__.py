"""Utils package initialization."""
from amazon_scraper.utils.logger import get_logger, LayerLogger, set_trace_id, configure_logging

__all__ = ["get_logger", "LayerLogger", "set_trace_id", "configure_logging"]
