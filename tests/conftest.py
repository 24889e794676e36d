import pytest
from loguru import logger


@pytest.fixture
def log_messages():
    """Collect loguru records emitted during a test."""
    records: list = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)
