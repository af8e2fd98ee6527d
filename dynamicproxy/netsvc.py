# -*- coding: utf-8 -*-
# Part of DynamicProxy, see License file for full copyright and licensing details.

import logging
import os
import sys
import warnings

from . import tools

_logger = logging.getLogger(__name__)


BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE, _NOTHING, DEFAULT = range(10)
#The background is set with 40 plus the number of the color, and the foreground with 30
#These are the sequences needed to get colored output
RESET_SEQ = "\033[0m"
COLOR_SEQ = "\033[1;%dm"
BOLD_SEQ = "\033[1m"
COLOR_PATTERN = "%s%s%%s%s" % (COLOR_SEQ, COLOR_SEQ, RESET_SEQ)
LEVEL_COLOR_MAPPING = {
    logging.DEBUG: (BLUE, DEFAULT),
    logging.INFO: (GREEN, DEFAULT),
    logging.WARNING: (YELLOW, DEFAULT),
    logging.ERROR: (RED, DEFAULT),
    logging.CRITICAL: (WHITE, RED),
}


class PidFormatter(logging.Formatter):
    def format(self, record):
        record.pid = os.getpid()
        return logging.Formatter.format(self, record)


class ColoredFormatter(PidFormatter):
    def format(self, record):
        fg_color, bg_color = LEVEL_COLOR_MAPPING.get(record.levelno, (GREEN, DEFAULT))
        record.levelname = COLOR_PATTERN % (30 + fg_color, 40 + bg_color, record.levelname)
        return PidFormatter.format(self, record)


_handler = None
def init_logger():
    """ Install the dynamicproxy log handler on the root logger and apply
        the logger levels of the current configuration. Calling it again
        only re-applies the levels.
    """
    global _handler  # noqa: PLW0603
    if _handler is None:
        logging.captureWarnings(True)
        # enable deprecation warnings (disabled by default)
        warnings.simplefilter('default', category=DeprecationWarning)

        # create a format for log messages and dates
        format = '%(asctime)s %(pid)s %(levelname)s %(name)s: %(message)s'
        # Normal Handler on stderr
        handler = logging.StreamHandler()

        # handler.stream may lack a usable fileno(), e.g. when sys.stderr is
        # replaced by an in-memory stream
        def is_a_tty(stream):
            try:
                return os.isatty(stream.fileno())
            except (AttributeError, OSError, ValueError):
                return False

        if os.name == 'posix' and (is_a_tty(handler.stream) or os.environ.get("DYNAMICPROXY_PY_COLORS")):
            formatter = ColoredFormatter(format)
        else:
            formatter = PidFormatter(format)
        handler.setFormatter(formatter)
        logging.getLogger().addHandler(handler)
        _handler = handler

    # Configure loggers levels
    pseudo_config = PSEUDOCONFIG_MAPPER.get(tools.config['log_level'], [])

    logconfig = tools.config['log_handler']

    logging_configurations = DEFAULT_LOG_CONFIGURATION + pseudo_config + logconfig
    for logconfig_item in logging_configurations:
        try:
            loggername, level = logconfig_item.strip().split(':')
        except ValueError:
            sys.stderr.write("ERROR: invalid log handler %r, expected PREFIX:LEVEL\n" % logconfig_item)
            continue
        level = getattr(logging, level, logging.INFO)
        logger = logging.getLogger(loggername)
        logger.setLevel(level)

    for logconfig_item in logging_configurations:
        _logger.debug('logger level set: "%s"', logconfig_item)

DEFAULT_LOG_CONFIGURATION = [
    'dynamicproxy.calls:INFO',
    ':INFO',
]
PSEUDOCONFIG_MAPPER = {
    'debug_calls': ['dynamicproxy:DEBUG', 'dynamicproxy.calls:DEBUG'],
    'debug': ['dynamicproxy:DEBUG'],
    'info': [],
    'warn': ['dynamicproxy:WARNING'],
    'error': ['dynamicproxy:ERROR'],
    'critical': ['dynamicproxy:CRITICAL'],
}
