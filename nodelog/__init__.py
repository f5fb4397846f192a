"""
nodelog: merge and browse newline-delimited JSON logs from multiple nodes.

The engine (``nodelog.logviewer.corpus``, ``.filtering``, ``.grouping``) has no
Qt dependency; ``nodelog.logviewer.viewer`` provides the Qt front end.
"""

import logging

__version__ = '0.1'


basic_handler = None
def basic_config(log_level='INFO'):
    """Convenience function to log messages to stderr.

    Similar to logging.basicConfig, but installs the handler only once no
    matter how often it is called.
    """
    global basic_handler
    logger = logging.getLogger('')
    logger.setLevel(log_level)

    if basic_handler is None:
        basic_handler = logging.StreamHandler()
        basic_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)-7s %(name)s: %(message)s'
        ))
        logger.addHandler(basic_handler)
    return basic_handler
