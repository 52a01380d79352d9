"""Settings dialog for configuring QuizArena preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)


class SettingsDialog(QDialog):
    """Dialog for configuring application settings."""

    def __init__(
        self,
        parent=None,
        game_font_size: int = 14,
        shuffle_seed: int | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(400)

        self._game_font_size = game_font_size
        self._shuffle_seed = shuffle_seed

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        font_group = QGroupBox("Display")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)

        game_font_row = QHBoxLayout()
        game_font_label = QLabel("Game Font Size (questions, explanations):")
        self.game_font_spinbox = QSpinBox()
        self.game_font_spinbox.setRange(10, 32)
        self.game_font_spinbox.setValue(self._game_font_size)
        self.game_font_spinbox.setSuffix(" pt")
        game_font_row.addWidget(game_font_label)
        game_font_row.addStretch()
        game_font_row.addWidget(self.game_font_spinbox)
        font_layout.addLayout(game_font_row)

        layout.addWidget(font_group)

        shuffle_group = QGroupBox("Question Order")
        shuffle_layout = QVBoxLayout()
        shuffle_group.setLayout(shuffle_layout)

        self.fixed_seed_checkbox = QCheckBox("Use a fixed shuffle seed (repeatable question order)")
        self.fixed_seed_checkbox.setToolTip(
            "When enabled, quizzes started after applying draw questions in a repeatable order."
        )
        self.fixed_seed_checkbox.setChecked(self._shuffle_seed is not None)
        shuffle_layout.addWidget(self.fixed_seed_checkbox)

        seed_row = QHBoxLayout()
        seed_label = QLabel("Seed:")
        self.seed_spinbox = QSpinBox()
        self.seed_spinbox.setRange(0, 999_999)
        self.seed_spinbox.setValue(self._shuffle_seed or 0)
        self.seed_spinbox.setEnabled(self._shuffle_seed is not None)
        self.fixed_seed_checkbox.toggled.connect(self.seed_spinbox.setEnabled)
        seed_row.addWidget(seed_label)
        seed_row.addStretch()
        seed_row.addWidget(self.seed_spinbox)
        shuffle_layout.addLayout(seed_row)

        layout.addWidget(shuffle_group)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def get_game_font_size(self) -> int:
        """Get the selected game font size."""
        return self.game_font_spinbox.value()

    def get_shuffle_seed(self) -> int | None:
        """Get the fixed shuffle seed, or None for a fresh random order."""
        if not self.fixed_seed_checkbox.isChecked():
            return None
        return self.seed_spinbox.value()
