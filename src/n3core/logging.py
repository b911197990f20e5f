import logging
import logging.config
from copy import deepcopy
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_LOGGING_OPTIONS = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'full': {
            'format': '%(levelname)s|%(asctime)s|%(threadName)s|%(name)s|%(message)s'
        },
        'messageonly': {
            'format': '%(message)s'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'messageonly',
            'stream': 'ext://sys.stderr'
        },
        'file': {
            'class': 'logging.FileHandler',
            'level': 'DEBUG',
            'formatter': 'full'
        }
    },
    'loggers': {
        '__main__': {
            'level': 'DEBUG',
            'handlers': ['console', 'file'],
            'propagate': False
        },
        'n3core': {
            'level': 'DEBUG',
            'handlers': ['console', 'file'],
            'propagate': False
        },
    },
    'root': {
        'level': 'DEBUG'
    }
}


def configure_logging(
        config_file: Optional[str | Path] = None,
        log_file: Optional[str | Path] = None,
        level: Optional[str] = None,
) -> dict:
    """Configure the `logging` module and return the options that were used.

    :param config_file: YAML file with a `logging.config` dictionary. If not
        given, a copy of `DEFAULT_LOGGING_OPTIONS` is used.
    :param log_file: Filename for the "file" handler. If not given, the "file"
        handler is removed.
    :param level: Level for the "console" handler, e.g. "DEBUG" or "WARNING".
    """
    if config_file is not None:
        with open(config_file, 'r') as fh:
            logging_options = yaml.safe_load(fh)
    else:
        logging_options = deepcopy(DEFAULT_LOGGING_OPTIONS)

    handlers = logging_options.get('handlers', {})
    if 'file' in handlers:
        if log_file is not None:
            handlers['file']['filename'] = str(log_file)
        else:
            del handlers['file']
            for logger_options in logging_options.get('loggers', {}).values():
                if 'file' in logger_options.get('handlers', []):
                    logger_options['handlers'].remove('file')

    if level is not None and 'console' in handlers:
        handlers['console']['level'] = level.upper()

    logging.config.dictConfig(logging_options)
    return logging_options
