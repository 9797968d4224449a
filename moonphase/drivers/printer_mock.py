from typing import List, Optional

from moonphase.config import PRINTER_WIDTH
from moonphase.render import image_to_ascii


class PrinterDriver:
    """Console printer. Keeps everything it printed in ``lines`` and ``images``."""

    def __init__(
        self,
        width: int = PRINTER_WIDTH,
        prefix: str = "[PRINT] ",
        echo: bool = True,
    ):
        self.width = width
        self.prefix = prefix
        self.echo = echo
        self.lines: List[str] = []
        self.images = []

    def _emit(self, text: str):
        self.lines.append(text)
        if self.echo:
            print(f"{self.prefix}{text}")

    def print_text(self, text: str):
        """Prints a line of text (embedded newlines become separate lines)."""
        for line in text.split("\n"):
            self._emit(line)

    def print_line(self):
        """Prints a separator line."""
        self._emit("-" * self.width)

    def feed(self, lines: int = 3):
        """Simulates paper feed."""
        for _ in range(lines):
            self._emit("")

    def print_header(self, text: str):
        """Prints centered header text."""
        padding = max(0, (self.width - len(text)) // 2)
        self._emit(f"{' ' * padding}{text.upper()}")
        self.print_line()

    def print_image(self, img, cols: Optional[int] = None):
        """Prints a 1-bit image as rows of characters, centered on the paper."""
        self.images.append(img)
        cols = cols or min(self.width, img.width)
        out_cols = img.width // max(1, img.width // cols)
        padding = " " * max(0, (self.width - out_cols) // 2)
        for row in image_to_ascii(img, cols=cols):
            self._emit(f"{padding}{row}" if row else "")

    def flush_buffer(self):
        """Flush the print buffer (nothing is buffered on the console)."""
        pass

    def reset_buffer(self):
        """Forget everything printed so far."""
        self.lines = []
        self.images = []

    def output(self) -> str:
        """Everything printed so far, as one string."""
        return "\n".join(self.lines)

    def close(self):
        """Close the connection."""
        pass
