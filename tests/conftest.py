import logging

import pytest


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("resp_playground")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
