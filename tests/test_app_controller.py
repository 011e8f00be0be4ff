"""Controller wiring tests with mocked widgets (no window is created)."""

from unittest.mock import MagicMock

import pytest

pytest.importorskip("customtkinter", reason="customtkinter (tkinter) not installed")

from image_ascii.controllers import app_controller  # noqa: E402
from image_ascii.controllers.app_controller import AppController  # noqa: E402
from image_ascii.models.ascii_model import AsciiConfig  # noqa: E402


def _make_controller(params=(4, False, 100.0), preview="Нет") -> AppController:
    sidebar = MagicMock()
    sidebar.get_conversion_params.return_value = params
    sidebar.get_preview_mode.return_value = preview
    return AppController(
        viewer=MagicMock(),
        sidebar=sidebar,
        ascii_view=MagicMock(),
        bottom=MagicMock(),
        window=MagicMock(),
    )


@pytest.fixture
def step_path(write_image, step_image):
    return write_image(step_image, "step.png")


class TestBindEvents:
    def test_callbacks_are_registered(self):
        controller = _make_controller()
        controller.bind_events()
        assert controller.sidebar.on_open_file == controller._handle_open_file
        assert controller.sidebar.on_settings_change == controller._handle_settings_change
        assert controller.sidebar.on_save == controller._handle_save
        assert controller.bottom.on_font_size_change == controller._handle_font_size_change


class TestOpenAndConvert:
    def test_open_image_renders_text(self, step_path):
        controller = _make_controller()
        controller.open_image(str(step_path))

        controller.viewer.set_image.assert_called_once()
        controller.sidebar.set_image_info.assert_called_once()
        text = controller.ascii_view.set_text.call_args[0][0]
        rows = text.splitlines()
        assert all(len(row) == 4 for row in rows)
        assert len(rows) == 1  # round(4 * 2/4 * 0.55) == 1
        controller.viewer.set_processed_image.assert_called_with(None)
        controller.bottom.set_zoom_percent.assert_called_once_with(controller.viewer.get_zoom_percent.return_value)

    def test_open_missing_file_reports_error(self, tmp_path):
        controller = _make_controller()
        controller.open_image(str(tmp_path / "missing.png"))
        controller.ascii_view.set_text.assert_not_called()
        assert controller.bottom.set_status.call_args.kwargs == {"error": True}

    def test_settings_change_reconverts(self, step_path):
        controller = _make_controller()
        controller.open_image(str(step_path))
        controller.sidebar.get_conversion_params.return_value = (8, True, 50.0)
        controller._handle_settings_change()
        text = controller.ascii_view.set_text.call_args[0][0]
        assert len(text.splitlines()[0]) == 8

    def test_settings_change_without_image_is_noop(self):
        controller = _make_controller()
        controller._handle_settings_change()
        controller.ascii_view.set_text.assert_not_called()

    def test_edge_preview(self, step_path):
        controller = _make_controller(preview="Границы")
        controller.open_image(str(step_path))
        preview = controller.viewer.set_processed_image.call_args[0][0]
        assert preview is not None
        assert preview.mode == "L"


class TestStatusAndConfig:
    def test_zoom_does_not_replace_error_status(self, tmp_path):
        controller = _make_controller()
        controller.bind_events()
        controller.open_image(str(tmp_path / "missing.png"))
        controller.bottom.set_status.reset_mock()

        controller.viewer.on_zoom_change(150)

        controller.bottom.set_zoom_percent.assert_called_with(150)
        controller.bottom.set_status.assert_not_called()

    def test_current_config_keeps_base_char_aspect(self):
        controller = _make_controller(params=(12, True, 40.0))
        controller._base_config = AsciiConfig(char_aspect=1.0)
        config = controller.current_config()
        assert (config.target_width, config.enable_edge_detection) == (12, True)
        assert config.edge_sensitivity == 40.0
        assert config.char_aspect == 1.0


class TestExportActions:
    def test_copy_uses_clipboard(self, step_path):
        controller = _make_controller()
        controller.open_image(str(step_path))
        controller._handle_copy()
        controller.window.clipboard_clear.assert_called_once()
        controller.window.clipboard_append.assert_called_once_with(controller._current_art.text)

    def test_save_writes_file(self, step_path, tmp_path, monkeypatch):
        target = tmp_path / "out.txt"
        monkeypatch.setattr(app_controller.filedialog, "asksaveasfilename", lambda **kwargs: str(target))
        controller = _make_controller()
        controller.open_image(str(step_path))
        controller._handle_save()
        assert target.read_text(encoding="utf-8") == controller._current_art.text

    def test_save_cancelled(self, step_path, monkeypatch):
        monkeypatch.setattr(app_controller.filedialog, "asksaveasfilename", lambda **kwargs: "")
        controller = _make_controller()
        controller.open_image(str(step_path))
        controller.bottom.set_status.reset_mock()
        controller._handle_save()
        controller.bottom.set_status.assert_not_called()
