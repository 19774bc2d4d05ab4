"""Cuts the current frame out of a sprite sheet image."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from PIL import Image, ImageOps

from sprite_sheet.types import Axis, Color, SpriteGlow

if TYPE_CHECKING:
    from sprite_sheet.engine import SpriteController

Rect = tuple[float, float, float, float]


class SpriteRenderer:
    """Renders a controller's current frame from a PIL sprite sheet.

    Attach it to a controller to track when the frame needs repainting
    and when the active animation (and so the frame size) changed.
    """

    def __init__(self, glow: Optional[SpriteGlow] = None):
        """Initialize the renderer.

        Args:
            glow: Optional glow whose color is resolved per frame.
        """
        self.glow = glow
        self.controller: Optional[SpriteController] = None
        self.needs_layout = True
        self.needs_paint = True
        self._last_animation: Any = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def attach(self, controller: SpriteController) -> None:
        """Start listening to a controller."""
        self.detach()
        self.controller = controller
        self._last_animation = controller.current_animation
        self._unsubscribe = controller.subscribe(self.update)
        self.needs_layout = True
        self.needs_paint = True

    def detach(self) -> None:
        """Stop listening to the attached controller."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.controller = None

    def update(self, controller: SpriteController) -> None:
        """Controller listener: mark what needs redrawing."""
        if controller.current_animation != self._last_animation:
            self._last_animation = controller.current_animation
            self.needs_layout = True
        self.needs_paint = True

    def source_rect(self, controller: SpriteController) -> Optional[Rect]:
        """Get the (left, top, width, height) of the current frame.

        Horizontal sheets are read row by row; vertical sheets are read
        column by column, top to bottom.

        Returns:
            The source rectangle, or None if nothing is playing.
        """
        sheet = controller.current_animation_sheet
        if sheet is None:
            return None

        if sheet.axis is Axis.HORIZONTAL:
            column, row = controller.offset_frame
        else:
            column, row = divmod(controller.frame, sheet.rows)

        return (column * sheet.width, row * sheet.height, sheet.width, sheet.height)

    def layout_size(self, controller: SpriteController, bounds: tuple[int, int]) -> tuple[int, int]:
        """Get the largest frame size that fits in ``bounds`` keeping aspect."""
        sheet = controller.current_animation_sheet
        if sheet is None:
            return (0, 0)

        scale = min(bounds[0] / sheet.width, bounds[1] / sheet.height)
        return (max(1, round(sheet.width * scale)), max(1, round(sheet.height * scale)))

    def render(
        self,
        controller: Optional[SpriteController] = None,
        bounds: Optional[tuple[int, int]] = None,
    ) -> Optional[Image.Image]:
        """Render the current frame.

        Args:
            controller: Controller to render. Defaults to the attached one.
            bounds: Optional (width, height) to scale the frame into.

        Returns:
            The frame image with flips applied, or None if nothing is active.
        """
        controller = controller or self.controller
        if controller is None:
            return None

        rect = self.source_rect(controller)
        if rect is None:
            return None

        sheet = controller.current_animation_sheet
        left, top, width, height = rect
        box = (round(left), round(top), round(left + width), round(top + height))
        frame = sheet.image.crop(box)

        if bounds is not None:
            # Nearest neighbour keeps pixel art crisp
            frame = frame.resize(
                self.layout_size(controller, bounds),
                Image.Resampling.NEAREST,
            )

        if controller.is_flipped_x:
            frame = ImageOps.mirror(frame)
        if controller.is_flipped_y:
            frame = ImageOps.flip(frame)

        if controller is self.controller:
            self.needs_paint = False
            self.needs_layout = False
        return frame

    def glow_color(self, controller: Optional[SpriteController] = None) -> Optional[Color]:
        """Resolve the glow color for the current frame.

        Returns:
            The color, or None if there is no visible glow or no active sheet.
        """
        controller = controller or self.controller
        if self.glow is None or not self.glow.is_visible or controller is None:
            return None

        sheet = controller.current_animation_sheet
        if sheet is None:
            return None
        return self.glow.color_for(sheet, controller.frame)
