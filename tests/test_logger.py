import logging

from cltodo.utils.logger import PACKAGE_LOGGER, configure_logging, get_logger


def test_module_loggers_follow_package_level():
    module_logger = get_logger("cltodo.services.todo_crud")
    try:
        configure_logging(debug=True)
        assert module_logger.getEffectiveLevel() == logging.DEBUG

        configure_logging(debug=False)
        assert module_logger.getEffectiveLevel() == logging.INFO
    finally:
        configure_logging(debug=False)


def test_handler_is_attached_once():
    configure_logging(debug=False)
    configure_logging(debug=True)
    try:
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1
    finally:
        configure_logging(debug=False)


def test_cli_applies_debug_setting(invoke, app_context):
    app_context.settings.DEBUG = True
    try:
        assert invoke("get").exit_code == 0
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
    finally:
        configure_logging(debug=False)
