from .logging import get_logger, configure_logging, PrefixedLogger

__all__ = ["get_logger", "configure_logging", "PrefixedLogger"]
