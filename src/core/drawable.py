from typing import Protocol, Tuple


class RenderSurface(Protocol):
    """2-D drawing target the scene paints onto once per tick.

    Coordinates are pixels with the origin at the top-left. A surface must
    never fail for a missing image: sprites fall back to a placeholder and
    the background to procedural sky art.
    """

    def begin_frame(self, width: float, height: float) -> None: ...
    def draw_background(self) -> None: ...
    def draw_ground(self, ground_y: float) -> None: ...
    def draw_sprite(self, key: str, x: float, y: float, w: float, h: float) -> None: ...
    def draw_text(self, glyph: str, x: float, y: float, alpha: float) -> None: ...
    def end_frame(self) -> None: ...


class ViewportProvider(Protocol):
    def size(self) -> Tuple[float, float]: ...  # noqa: D401
