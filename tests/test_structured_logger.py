import logging

from ordercapture.shared.logger import StructuredLogger


def test_console_line_carries_context(caplog):
    logger = StructuredLogger("test-structured-logger", level="DEBUG")
    console = logging.getLogger("test-structured-logger.console")
    console.addHandler(caplog.handler)
    try:
        logger.bind(order_id="abc123").info("Order captured", backend="self-managed-store")
        logger.trace("trace line")
    finally:
        console.removeHandler(caplog.handler)

    messages = [r.getMessage() for r in caplog.records]
    assert any("Order captured" in m and "order_id=abc123" in m and "backend=self-managed-store" in m for m in messages)
    assert any("DEBUG: trace line" in m for m in messages)


def test_instances_share_handlers():
    first = StructuredLogger("test-shared-handlers")
    second = StructuredLogger("test-shared-handlers")
    assert len(logging.getLogger("test-shared-handlers.console").handlers) == 1
    assert second.file_logger is None
    assert first is not second


def test_file_sink_writes_json(tmp_path):
    log_file = tmp_path / "orders.log"
    logger = StructuredLogger("test-file-sink", log_file=str(log_file))
    logger.critical("insert failed", order_id="abc123")

    for handler in logging.getLogger("test-file-sink.file").handlers:
        handler.flush()
    content = log_file.read_text(encoding="utf-8")
    assert '"event": "insert failed"' in content
    assert '"order_id": "abc123"' in content
    assert '"level": "critical"' in content
