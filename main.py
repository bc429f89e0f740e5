"""
Numeric Entry - Sample Application
Main Application Module

Shows numeric text boxes configured with different ranges, each with an
error label that displays the current validation message.
"""
import sys
from typing import Dict, List, Optional

from PySide6.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QFormLayout, QGroupBox, QLabel, QMessageBox
)
from PySide6.QtCore import Qt

from logger import get_logger, setup_logger, LoggableMixin, LogCategory
from numeric_entry import NumericEntryConfig
from numeric_text_box import NumericTextBox

APP_NAME = "Numeric Entry"
APP_VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Sample field presets
# ---------------------------------------------------------------------------
FIELD_PRESETS = [
    {
        "key": "decimal",
        "title": "Decimal (0 to 10)",
        "config": NumericEntryConfig(minimum=0, maximum=10),
    },
    {
        "key": "integer",
        "title": "Integer (above 0, up to 100)",
        "config": NumericEntryConfig(
            minimum=0,
            maximum=100,
            include_minimum=False,
            integer_only=True,
            minimum_message="Quantity must be at least 1.",
        ),
    },
]

ERROR_LABEL_STYLE = "color: #dc3545; font-size: 12px;"


class NumericEntryDemoWindow(QWidget, LoggableMixin):
    """Window hosting the sample numeric fields."""

    def __init__(self, presets: Optional[List[dict]] = None, parent=None):
        QWidget.__init__(self, parent)
        LoggableMixin.__init__(self)
        self.presets = presets if presets is not None else FIELD_PRESETS
        self.fields: Dict[str, NumericTextBox] = {}
        self.error_labels: Dict[str, QLabel] = {}
        self.setup_ui()
        self.log_debug("Sample window initialized", category=LogCategory.SYSTEM)

    def setup_ui(self):
        """Build one form row and error label per preset."""
        self.setWindowTitle(f"{APP_NAME} {APP_VERSION}")
        layout = QVBoxLayout(self)
        group = QGroupBox("Numeric fields")
        form = QFormLayout(group)
        for preset in self.presets:
            key = preset["key"]
            field = NumericTextBox(self, preset["config"])
            field.setObjectName(f"{key}Field")
            error_label = QLabel("")
            error_label.setObjectName(f"{key}Error")
            error_label.setStyleSheet(ERROR_LABEL_STYLE)
            error_label.setVisible(False)
            field.validation_message_changed.connect(
                lambda message, k=key: self._on_validation_message_changed(k, message)
            )
            form.addRow(preset["title"], field)
            form.addRow("", error_label)
            self.fields[key] = field
            self.error_labels[key] = error_label
        layout.addWidget(group)
        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        layout.addWidget(self.status_label)
        self.update_status()

    def _on_validation_message_changed(self, key: str, message: str):
        label = self.error_labels[key]
        label.setText(message)
        label.setVisible(bool(message))
        self.update_status()

    def invalid_fields(self) -> List[str]:
        return [key for key, field in self.fields.items() if field.validation_message()]

    def update_status(self):
        """Summarize how many fields currently hold invalid values."""
        invalid = self.invalid_fields()
        if invalid:
            self.status_label.setText(f"{len(invalid)} field(s) need attention")
        else:
            self.status_label.setText("All values valid")


def run_application() -> int:
    """Create the QApplication, show the sample window and run the event loop."""
    logger = get_logger()
    logger.info(f"{APP_NAME} {APP_VERSION} starting", category=LogCategory.SYSTEM)
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    try:
        window = NumericEntryDemoWindow()
        window.show()
        exit_code = app.exec()
        logger.info(f"{APP_NAME} exited with code: {exit_code}", category=LogCategory.SYSTEM)
        return exit_code
    except Exception as e:
        logger.critical(f"Critical error starting {APP_NAME}", exception=e)
        QMessageBox.critical(None, "Critical Error",
                             f"Failed to start {APP_NAME}:\n{str(e)}\n\nCheck logs for details.")
        return 1


def main() -> int:
    """Main entry point for the sample application."""
    setup_logger("numeric_entry")
    return run_application()


if __name__ == "__main__":
    sys.exit(main())
