from document_loader import DocumentError
from text_view import TextView


class AppState:
    def __init__(self, text, file_path, loader, config=None):
        self.file_path = file_path
        self.loader = loader
        self.config = dict(config or {})

        read_only = bool(loader and loader.read_only)
        self.view = TextView(text, read_only=read_only)

    @property
    def read_only(self) -> bool:
        return self.view.read_only

    def save(self) -> None:
        if self.loader is None:
            raise DocumentError("no file name (start lectern with a path)")
        self.loader.save(self.view.text)
        self.view.modified = False
