import logging

import pytest

from hyperbolic_illusion.base import InvalidTilingError
from hyperbolic_illusion.logging_config import setup_logging
from hyperbolic_illusion.tiling import generate_tiling_params

@pytest.fixture
def package_logger():
    logger = logging.getLogger("hyperbolic_illusion")
    handlers = list(logger.handlers)
    level = logger.level

    yield logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)

def test_setup_logging(package_logger, tmp_path):
    log_file = tmp_path / "tiling.log"

    assert setup_logging(logging.DEBUG, log_file=str(log_file)) is package_logger
    setup_logging(logging.DEBUG, log_file=str(log_file))
    assert len(package_logger.handlers) == 2

    generate_tiling_params(7, 3, 0.0137)

    contents = log_file.read_text(encoding="utf-8")
    assert "hyperbolic_illusion.tiling - DEBUG" in contents
    assert "{7, 3}" in contents

def test_warning_before_error(package_logger, caplog):
    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidTilingError):
            generate_tiling_params(3, 3, 0.02)

    assert "Rejecting non-hyperbolic tiling {3, 3}" in caplog.text

def test_warning_before_thickness_error(package_logger, caplog):
    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidTilingError):
            generate_tiling_params(4, 5, -0.01)

    assert "Rejecting non-positive edge thickness -0.01" in caplog.text
