from logger import LogCategory, LoggableMixin, setup_logger

def test_logger_accepts_string_category(tmp_path):
    log_dir = tmp_path / "logs"
    logger = setup_logger(log_dir=log_dir)

    logger.info("String category entry", category="validation", extra_field="value")

    for handler in logger.logger.handlers:
        handler.flush()

    log_file = log_dir / "numeric_entry.log"
    assert log_file.exists()
    content = log_file.read_text(encoding="utf-8")
    assert "String category entry" in content
    assert '"category": "VALIDATION"' in content
    assert '"field_extra_field": "value"' in content


def test_mixin_prefixes_class_name_and_routes_errors(tmp_path):
    class Widget(LoggableMixin):
        def __init__(self):
            LoggableMixin.__init__(self)

    logger = setup_logger(log_dir=tmp_path)
    Widget().log_error("Paste failed", exception=ValueError("boom"), category=LogCategory.INPUT_FILTER)

    for handler in logger.logger.handlers:
        handler.flush()

    errors = (tmp_path / "numeric_entry_errors.log").read_text(encoding="utf-8")
    assert "[Widget] Paste failed" in errors
    assert '"category": "INPUT_FILTER"' in errors
    assert '"type": "ValueError"' in errors
