from .logging import close_file_logging, get_logger, setup_file_logging

__all__ = ["get_logger", "setup_file_logging", "close_file_logging"]
