import logging

logger = logging.getLogger("warntrace")
logger.setLevel(logging.INFO)
