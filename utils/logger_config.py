import logging
import os
from datetime import datetime


def setup_logger(name, log_dir=None):
    """
    Basic Custom Logging formatting and handling

    Parameters
    name (str) : Name of the logger
    log_dir (str | None) : Directory for the daily log file, console only when None

    Returns:
    logging.Logger : Configured Logger Instance
    """

    logger = logging.getLogger(name)

    # Streamlit re-executes the script on every interaction
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    # Console logs configs
    console_format = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s'
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)

        # Configs for how logs will appear in logs/
        file_format = logging.Formatter(
            '%(levelname)s : %(name)s : %(funcName)s : %(lineno)d : %(message)s'
        )

        log_file = os.path.join(
            log_dir, f'london_crime_{datetime.now().strftime("%m%d%Y")}'
        )
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger
