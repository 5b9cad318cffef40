from loguru import logger

import clustereval.utils.logger_utils  # noqa: F401
from clustereval.utils import get_logger, setup_logging


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    setup_logging(level="DEBUG", log_file=log_file)

    get_logger("tests.logging").info("validation started")
    logger.info("unbound message")

    content = log_file.read_text(encoding="utf-8")
    assert "tests.logging - validation started" in content
    assert "unbound message" in content

    setup_logging(level="INFO")


def test_import_leaves_global_logger_extra_untouched():
    captured = []
    sink_id = logger.add(lambda message: captured.append(dict(message.record["extra"])))
    try:
        logger.info("host application message")
    finally:
        logger.remove(sink_id)

    assert captured == [{}]
