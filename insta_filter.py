import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from PIL.ImageQt import ImageQt
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QImage, QPixmap
from PyQt5.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from IF_Libs.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    EXPORT_IMAGE_FILTER,
    PREVIEW_MIN_SIZE,
    SHARE_PREVIEW_TITLE,
    SLIDER_STEPS,
    STANDARD_IMAGE_FILTER,
    WINDOW_TITLE,
)
from IF_Libs.FilterLib import ParameterKey, get_filter_options
from IF_Libs.ImageIOLib import ImageAcquirer, default_export_name, save_image
from IF_Libs.PipelineLib import PARAMETER_RANGES, FilterPipeline, UsageCounter
from IF_Libs.PrefStoreLib import PreferenceStore, default_preferences_path


class InstaFilterMainWindow(QMainWindow):
    # Decoded images arrive from the acquirer's worker thread; the queued
    # signal delivers them on the GUI thread.
    image_loaded = pyqtSignal(object)
    image_failed = pyqtSignal(str)

    def __init__(self, pipeline: FilterPipeline, acquirer: ImageAcquirer) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.pipeline = pipeline
        self.acquirer = acquirer
        self.source_path: Optional[Path] = None
        self.sliders: Dict[ParameterKey, QSlider] = {}

        self._build_ui()
        self._connect_signals()
        self._update_controls()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QVBoxLayout(central)

        self.label_preview = QLabel("No Picture\nImport a photo to get started")
        self.label_preview.setAlignment(Qt.AlignCenter)
        self.label_preview.setMinimumSize(PREVIEW_MIN_SIZE, PREVIEW_MIN_SIZE)
        self.label_preview.setStyleSheet("border: 1px solid #888;")

        self.btn_import = QPushButton("Import Photo")
        self.label_filter = QLabel()

        root.addWidget(self.btn_import)
        root.addWidget(self.label_preview, stretch=1)
        root.addWidget(self.label_filter)

        for key, title in (
            (ParameterKey.INTENSITY, "Intensity"),
            (ParameterKey.RADIUS, "Radius"),
            (ParameterKey.SCALE, "Scale"),
        ):
            row = QHBoxLayout()
            slider = QSlider(Qt.Horizontal)
            slider.setRange(0, self._slider_maximum(key))
            slider.setValue(self._to_slider(key, self.pipeline.parameters.get(key)))
            row.addWidget(QLabel(title))
            row.addWidget(slider)
            root.addLayout(row)
            self.sliders[key] = slider

        buttons = QHBoxLayout()
        self.btn_change_filter = QPushButton("Change Filter")
        self.btn_share = QPushButton("Share")
        buttons.addWidget(self.btn_change_filter)
        buttons.addWidget(self.btn_share)
        root.addLayout(buttons)

    def _connect_signals(self) -> None:
        self.btn_import.clicked.connect(self.import_photo)
        self.btn_change_filter.clicked.connect(self.change_filter)
        self.btn_share.clicked.connect(self.share_image)
        for key, slider in self.sliders.items():
            slider.valueChanged.connect(lambda value, key=key: self.on_slider_changed(key, value))

        self.image_loaded.connect(self.on_image_loaded)
        self.image_failed.connect(self.on_image_failed)
        self.pipeline.add_output_listener(self.on_output_changed)
        self.pipeline.add_review_listener(self.request_review)

    # Slider values are integers; intensity maps 0-1 onto SLIDER_STEPS steps
    def _slider_maximum(self, key: ParameterKey) -> int:
        low, high = PARAMETER_RANGES[key]
        if key is ParameterKey.INTENSITY:
            return SLIDER_STEPS
        return int(high - low)

    def _to_slider(self, key: ParameterKey, value: float) -> int:
        if key is ParameterKey.INTENSITY:
            return int(round(value * SLIDER_STEPS))
        return int(round(value))

    def _from_slider(self, key: ParameterKey, value: int) -> float:
        if key is ParameterKey.INTENSITY:
            return value / SLIDER_STEPS
        return float(value)

    def import_photo(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Select Photo", "", STANDARD_IMAGE_FILTER)
        if not file_path:
            return

        self.source_path = Path(file_path)
        self.acquirer.submit(
            self.source_path,
            on_loaded=self.image_loaded.emit,
            on_failed=lambda error: self.image_failed.emit(str(error)),
        )

    def on_image_loaded(self, image: Any) -> None:
        self.pipeline.bind_image(image)
        self._update_controls()

    def on_image_failed(self, message: str) -> None:
        self.statusBar().showMessage(f"Could not open photo: {message}", 5000)

    def on_slider_changed(self, key: ParameterKey, value: int) -> None:
        self.pipeline.set_parameter(key, self._from_slider(key, value))

    def change_filter(self) -> None:
        options = get_filter_options()
        labels = [label for _, label in options]
        current = labels.index(self.pipeline.kind.label)
        label, accepted = QInputDialog.getItem(
            self, "Select a filter", "Filter:", labels, current, False
        )
        if not accepted:
            return

        kind = options[labels.index(label)][0]
        self.pipeline.set_filter(kind)
        self._update_controls()

    def on_output_changed(self, image: Optional[Any]) -> None:
        # None means nothing new to show
        if image is None:
            return
        self._set_preview(image)
        self.btn_share.setEnabled(True)

    def share_image(self) -> None:
        image = self.pipeline.output
        if image is None:
            return

        suggested = default_export_name(self.source_path.name if self.source_path else None)
        save_path, _ = QFileDialog.getSaveFileName(
            self, f"Share {SHARE_PREVIEW_TITLE}", suggested, EXPORT_IMAGE_FILTER
        )
        if not save_path:
            return

        try:
            save_image(image, Path(save_path))
        except (OSError, ValueError) as e:
            QMessageBox.warning(self, "Share Failed", str(e))
            return
        self.statusBar().showMessage(f"Saved {save_path}", 5000)

    def request_review(self) -> None:
        QMessageBox.information(
            self,
            "Enjoying InstaFilter?",
            "You've tried a lot of filters! Please consider leaving a review.",
        )

    def _update_controls(self) -> None:
        has_image = self.pipeline.has_image
        self.btn_change_filter.setEnabled(has_image)
        self.btn_share.setEnabled(self.pipeline.output is not None)
        self.label_filter.setText(f"Filter: {self.pipeline.kind.label}")
        for key, slider in self.sliders.items():
            slider.setEnabled(self.pipeline.is_parameter_enabled(key))

    def _set_preview(self, image: Any) -> None:
        # Keep the ImageQt wrapper alive until the pixmap owns a copy
        qt_image = ImageQt(image.convert("RGBA"))
        pixmap = QPixmap.fromImage(QImage(qt_image))
        if pixmap.isNull():
            self.label_preview.setText("Preview failed")
            return

        scaled = pixmap.scaled(
            self.label_preview.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.label_preview.setPixmap(scaled)

    def closeEvent(self, event) -> None:
        self.acquirer.shutdown(wait=False)
        super().closeEvent(event)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = PreferenceStore(default_preferences_path())
    pipeline = FilterPipeline(UsageCounter(store))
    acquirer = ImageAcquirer()

    app = QApplication(sys.argv)
    window = InstaFilterMainWindow(pipeline, acquirer)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
