import customtkinter as ctk

from image_ascii.controllers.app_controller import AppController
from image_ascii.ui.ascii_view import AsciiView
from image_ascii.ui.bottom_bar import BottomBar
from image_ascii.ui.image_viewer import ImageViewer
from image_ascii.ui.sidebar import Sidebar


class AsciiArtApp(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("Image → ASCII")
        self.minsize(1000, 640)

        # root layout: viewer | ascii text | sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=2)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._ascii_view = AsciiView(self)
        self._ascii_view.grid(row=0, column=1, sticky="nsew", padx=6, pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=2, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=3, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            viewer=self._viewer,
            sidebar=self._sidebar,
            ascii_view=self._ascii_view,
            bottom=self._bottom,
            window=self,
        )
        self._controller.bind_events()

    def open_image(self, file_path: str) -> None:
        self._controller.open_image(file_path)
