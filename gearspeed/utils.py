import logging
import sys


# Configure logging
def setup_logger(name="gearspeed", level=logging.INFO):
    """Setup logger with consistent formatting"""
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(level)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    handler.setFormatter(formatter)

    # Add handler to logger
    logger.addHandler(handler)

    return logger


def set_log_level(level):
    """Change the level of the shared logger and its handlers"""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


# Create default logger instance
logger = setup_logger()


def format_rpm(rpm):
    """Format a rotational speed for display"""
    return f"{rpm:.1f} RPM"


def format_ratio(ratio):
    """Format a gear ratio as N.NN:1"""
    return f"{ratio:.2f}:1"


def format_gears(driving_gear, driven_gear):
    """Format a gear pair as 24T → 48T"""
    return f"{driving_gear}T → {driven_gear}T"


def format_factor(factor):
    return f"{factor:.2f}x"


def format_percent(count, total):
    """Percentage of total rounded to one decimal place"""
    if total == 0:
        return 0.0
    return round(count / total * 100, 1)
