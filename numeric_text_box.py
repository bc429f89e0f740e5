"""
Numeric Text Box Module for Numeric Entry.

Binds a NumericEntryFilter to Qt line edits. Typed text, input method
commits, paste shortcuts, context-menu paste, middle-click selection paste
and drag-and-drop are checked
before they reach the widget; every text change is validated and the
resulting message is published through a Qt signal.
"""

from typing import Dict, Optional

from PySide6.QtWidgets import QApplication, QLineEdit, QWidget
from PySide6.QtCore import Qt, QEvent, QObject, Signal
from PySide6.QtGui import QAction, QClipboard, QKeySequence

from logger import LoggableMixin, LogCategory
from numeric_entry import NumericEntryConfig, NumericEntryFilter


class NumericEntryEventFilter(QObject, LoggableMixin):
    """Event filter connecting a QLineEdit to a NumericEntryFilter."""

    validation_message_changed = Signal(str)

    def __init__(self, widget: QLineEdit, entry_filter: NumericEntryFilter):
        QObject.__init__(self, widget)
        LoggableMixin.__init__(self)
        self.widget = widget
        self.entry_filter = entry_filter
        widget.installEventFilter(self)
        widget.textChanged.connect(self._on_text_changed)
        entry_filter.add_message_listener(self._emit_message)
        self.entry_filter.validate(widget.text())
        self.log_debug(f"Installed numeric entry on {type(widget).__name__}",
                       category=LogCategory.SYSTEM)

    def detach(self):
        """Stop filtering and validating the widget."""
        self.widget.removeEventFilter(self)
        self.widget.textChanged.disconnect(self._on_text_changed)
        self.entry_filter.remove_message_listener(self._emit_message)
        self.log_debug(f"Removed numeric entry from {type(self.widget).__name__}",
                       category=LogCategory.SYSTEM)

    def revalidate(self) -> str:
        """Validate the widget's current text again, e.g. after a config change."""
        return self.entry_filter.validate(self.widget.text())

    def _on_text_changed(self, text: str):
        self.entry_filter.validate(text)

    def _emit_message(self, message: str):
        self.validation_message_changed.emit(message)

    def _clipboard_text(self) -> str:
        clipboard = QApplication.clipboard()
        return clipboard.text() if clipboard is not None else ""

    def _selection_text(self) -> Optional[str]:
        """Text of the X11/Wayland selection, or ``None`` where there is none."""
        clipboard = QApplication.clipboard()
        if clipboard is None or not clipboard.supportsSelection():
            return None
        return clipboard.text(QClipboard.Mode.Selection)

    def eventFilter(self, obj, event):
        """Swallow events that would insert disallowed characters."""
        if obj == self.widget:
            event_type = event.type()
            if event_type == QEvent.Type.KeyPress:
                if event.matches(QKeySequence.StandardKey.Paste):
                    return not self.entry_filter.accepts_paste(self._clipboard_text())
                text = event.text()
                # Control characters (backspace, enter, shortcuts) pass untouched
                if text and text.isprintable() and not self.entry_filter.accepts(text):
                    return True
            elif event_type == QEvent.Type.InputMethod:
                commit = event.commitString()
                if commit and not self.entry_filter.accepts(commit):
                    return True
            elif event_type == QEvent.Type.Drop:
                mime_data = event.mimeData()
                if mime_data.hasText() and not self.entry_filter.accepts_paste(mime_data.text()):
                    event.ignore()
                    return True
            elif event_type == QEvent.Type.MouseButtonRelease:
                # Middle click pastes the selection clipboard
                if event.button() == Qt.MouseButton.MiddleButton:
                    selection = self._selection_text()
                    if selection is not None and not self.entry_filter.accepts_paste(selection):
                        return True
            elif event_type == QEvent.Type.ContextMenu:
                self._show_context_menu(event)
                return True
        return super().eventFilter(obj, event)

    def _show_context_menu(self, event):
        """Show the standard menu with Paste disabled for rejected clipboard text."""
        menu = self.widget.createStandardContextMenu()
        paste_action = menu.findChild(QAction, "edit-paste")
        if paste_action is not None and paste_action.isEnabled():
            paste_action.setEnabled(self.entry_filter.accepts(self._clipboard_text()))
        menu.exec(event.globalPos())
        menu.deleteLater()


class NumericTextBox(QLineEdit):
    """Line edit that only admits numeric input and reports range problems."""

    validation_message_changed = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None,
                 config: Optional[NumericEntryConfig] = None, **overrides):
        super().__init__(parent)
        self.entry_filter = NumericEntryFilter(config, **overrides)
        self.binding = NumericEntryEventFilter(self, self.entry_filter)
        self.binding.validation_message_changed.connect(self.validation_message_changed)

    def validation_message(self) -> str:
        return self.entry_filter.validation_message

    def config(self) -> NumericEntryConfig:
        return self.entry_filter.config

    def set_config(self, config: NumericEntryConfig):
        self.entry_filter.config = config
        self.binding.revalidate()

    def configure(self, **changes) -> NumericEntryConfig:
        """Update configuration fields and revalidate the current text."""
        config = self.entry_filter.configure(**changes)
        self.binding.revalidate()
        return config

    def revalidate(self) -> str:
        return self.binding.revalidate()


class NumericEntryManager(LoggableMixin):
    """Keeps track of numeric entry bindings installed on plain line edits."""

    _instance = None

    def __init__(self):
        LoggableMixin.__init__(self)
        # Keyed by id(widget); each binding holds its widget, so ids stay unique
        self.bindings: Dict[int, NumericEntryEventFilter] = {}

    @classmethod
    def get_instance(cls):
        """Get singleton instance of the manager."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def install_on_widget(self, widget: QLineEdit, config: Optional[NumericEntryConfig] = None,
                          **overrides) -> NumericEntryEventFilter:
        """Install numeric filtering on a widget, or return the existing binding."""
        key = id(widget)
        binding = self.bindings.get(key)
        if binding is not None:
            return binding
        binding = NumericEntryEventFilter(widget, NumericEntryFilter(config, **overrides))
        self.bindings[key] = binding
        binding.forget_handler = lambda *args, k=key: self._forget(k)
        widget.destroyed.connect(binding.forget_handler)
        return binding

    def remove_from_widget(self, widget: QLineEdit):
        """Remove numeric filtering from a widget."""
        binding = self.bindings.pop(id(widget), None)
        if binding is not None:
            widget.destroyed.disconnect(binding.forget_handler)
            binding.detach()

    def binding_for(self, widget: QLineEdit) -> Optional[NumericEntryEventFilter]:
        return self.bindings.get(id(widget))

    def _forget(self, key: int):
        if self.bindings.pop(key, None) is not None:
            self.log_debug("Dropped binding of destroyed widget", category=LogCategory.SYSTEM)


# Convenience functions for global access
def get_numeric_entry_manager() -> NumericEntryManager:
    """Get the global numeric entry manager instance."""
    return NumericEntryManager.get_instance()


def install_numeric_entry(widget: QLineEdit, config: Optional[NumericEntryConfig] = None,
                          **overrides) -> NumericEntryEventFilter:
    """Install numeric filtering and validation on an existing line edit."""
    return get_numeric_entry_manager().install_on_widget(widget, config, **overrides)


def remove_numeric_entry(widget: QLineEdit):
    """Remove numeric filtering from a line edit."""
    get_numeric_entry_manager().remove_from_widget(widget)
