import logging
import logging.config
import os


def setup_logging(level='INFO', log_file=None):
    handlers = {
        'console': {
            'level': level,
            'class': 'logging.StreamHandler',
            'formatter': 'standard'
        },
    }

    if log_file:
        os.makedirs(os.path.dirname(log_file) or '.', exist_ok=True)
        handlers['file'] = {
            'level': level,
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': log_file,
            'maxBytes': 10485760,  # 10MB
            'backupCount': 5,
            'formatter': 'standard',
        }

    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
        },
        'handlers': handlers,
        'root': {
            'handlers': list(handlers),
            'level': level,
        },
    }

    logging.config.dictConfig(logging_config)
