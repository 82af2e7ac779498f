"""Set up logging for scripts using the package.

The package itself only attaches a `NullHandler`, so nothing is
printed unless a script asks for it:

```python
import logging
from hyperbolic_illusion.logging_config import setup_logging

setup_logging(logging.DEBUG)
```

"""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

def setup_logging(level=logging.INFO, log_file=None):
    """Configure the logger for the `hyperbolic_illusion` namespace.

    Parameters
    ----------
    level : int
        logging level (e.g. `logging.DEBUG`)
    log_file : str
        if specified, also write the log to this file (overwriting it)

    Returns
    -------
    logging.Logger
        the package logger

    """
    logger = logging.getLogger("hyperbolic_illusion")
    logger.setLevel(level)

    # calling this twice shouldn't duplicate every message
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w',
                                           encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized")
    return logger
