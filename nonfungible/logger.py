"""Module for initializing settings related to the built-in nonfungible logger
Functions:
-get_logger
-overwrite_logger_level"""

import logging, coloredlogs
import os

VALID_LVLS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
_LOG_LVL = os.getenv('LOG_LEVEL', None)
if _LOG_LVL:
    assert _LOG_LVL in VALID_LVLS, "Log level {} not in valid levels {}".format(_LOG_LVL, VALID_LVLS)
    _LOG_LVL = getattr(logging, _LOG_LVL)
else:
    _LOG_LVL = logging.WARNING

_LOG_FILE = os.getenv('NONFUNGIBLE_LOG_FILE', None)

format = '%(asctime)s.%(msecs)03d %(name)s[%(process)d] <{}> %(levelname)-2s %(message)s'.format(
    os.getenv('HOST_NAME', 'Node'))

"""
Custom Styling
"""

coloredlogs.DEFAULT_LEVEL_STYLES = {
    'critical': {'color': 'white', 'bold': True, 'background': 'red'},
    'error': {'color': 'red'},
    'warning': {'color': 'yellow'},
    'info': {'color': 'white'},
    'debug': {'color': 'green'},
}
coloredlogs.DEFAULT_FIELD_STYLES = {
    'asctime': {'color': 'green'},
    'hostname': {'color': 'magenta'},
    'levelname': {'color': 'black', 'bright': True},
    'name': {'color': 'blue'},
    'programname': {'color': 'cyan'}
}


class ColoredStreamHandler(logging.StreamHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setFormatter(
            coloredlogs.ColoredFormatter(format)
        )


def _handlers():
    handlers = [ColoredStreamHandler()]
    if _LOG_FILE:
        file_handler = logging.FileHandler(_LOG_FILE, delay=True)
        file_handler.setFormatter(logging.Formatter(format))
        handlers.append(file_handler)
    return handlers


def get_logger(name=''):
    log = logging.getLogger(name)

    # Handlers are attached once per named logger
    if not getattr(log, '_nonfungible_configured', False):
        for handler in _handlers():
            log.addHandler(handler)
        log.propagate = False
        log._nonfungible_configured = True

    log.setLevel(_LOG_LVL)
    return log


def overwrite_logger_level(level):
    global _LOG_LVL
    _LOG_LVL = level

    for name in logging.Logger.manager.loggerDict.keys():
        log = logging.getLogger(name)
        if getattr(log, '_nonfungible_configured', False):
            log.setLevel(level)
