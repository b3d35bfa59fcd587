"""Logging utilities for videouploader modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits from the root logger.
    
    Loggers obtained here work with basicConfig() without any explicit
    setup_logging() call. When the root logger has no handlers yet the
    level defaults to WARNING so library output stays quiet.
    
    Args:
        name: Logger name (typically 'videouploader.<module>')
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger
