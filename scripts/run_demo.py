#!/usr/bin/env python3
"""Run a demo of sprite sheet playback in the terminal."""

import argparse
import asyncio
import enum
import logging
import sys
from pathlib import Path

from PIL import Image, ImageDraw

# Add src to path for running directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sprite_sheet.app import AnimationLoop
from sprite_sheet.engine import SpriteController
from sprite_sheet.renderer import SpriteRenderer
from sprite_sheet.types import AnimationDirection, AnimationSheet, SpriteGlow, hue_cycle


class CharState(enum.Enum):
    IDLE = "idle"
    RUN = "run"


class EyesState(enum.Enum):
    APPEAR = "appear"
    IDLE = "idle"


def make_strip(columns: int, rows: int = 1, size: int = 16, color=(200, 150, 100)) -> Image.Image:
    """Draw a placeholder sheet with the frame number in every cell."""
    image = Image.new("RGBA", (columns * size, rows * size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    for row in range(rows):
        for column in range(columns):
            x, y = column * size, row * size
            draw.rectangle([x + 1, y + 1, x + size - 2, y + size - 2], outline=color)
            draw.text((x + 4, y + 2), str(column + row * columns), fill=color)
    return image


def build_demo(name: str, loop: AnimationLoop):
    """Create the controller and renderer for one demo."""
    if name == "char":
        controller = SpriteController(
            {
                CharState.RUN: AnimationSheet(image=make_strip(4), columns=4, rows=1),
                CharState.IDLE: AnimationSheet(image=make_strip(6), columns=6, rows=1),
            },
            clock=loop.clock,
        )
        controller.play(animation=CharState.IDLE)
        return controller, SpriteRenderer()

    if name == "eyes":
        controller = SpriteController(
            {
                EyesState.APPEAR: AnimationSheet(
                    image=make_strip(9), columns=9, rows=1, is_looping=False
                ),
                EyesState.IDLE: AnimationSheet(
                    image=make_strip(8),
                    columns=8,
                    rows=1,
                    direction=AnimationDirection.PING_PONG,
                ),
            },
            clock=loop.clock,
        )
        controller.play(animation=EyesState.APPEAR)
        controller.add_to_queue(EyesState.IDLE)
        glow = SpriteGlow.dynamic(hue_cycle(lightness=0.9), thickness_x=25, thickness_y=25, blur_y=15)
        return controller, SpriteRenderer(glow=glow)

    controller = SpriteController(
        {"sparkles": AnimationSheet(image=make_strip(1, rows=7), columns=1, rows=7)},
        clock=loop.clock,
    )
    controller.play(animation="sparkles")
    glow = SpriteGlow.dynamic(hue_cycle(), thickness_x=5, thickness_y=5, blur_x=25, blur_y=25)
    return controller, SpriteRenderer(glow=glow)


def print_state(controller, renderer, elapsed):
    """Print the controller state on one line."""
    animation = controller.current_animation
    name = animation.value if isinstance(animation, enum.Enum) else animation
    frame = renderer.render(controller)
    flips = ("X" if controller.is_flipped_x else "-") + ("Y" if controller.is_flipped_y else "-")
    print(
        f"{elapsed:6.2f}s  {name:<10} frame={controller.frame:<3} "
        f"offset=({controller.offset_frame.column},{controller.offset_frame.row}) "
        f"flip={flips} size={frame.size if frame else None} "
        f"glow={renderer.glow_color(controller)}"
    )


async def run_demo(name: str, seconds: float, fps: int):
    """Play one demo for a number of seconds."""
    print(f"Sprite Sheet Demo: {name}")
    print("=" * 60)

    loop = AnimationLoop(target_fps=fps)
    controller, renderer = build_demo(name, loop)
    renderer.attach(controller)

    def on_frame(dt):
        if name == "char":
            # Cycle run, flip x, flip y, back to idle once a second
            step = int(loop.clock.time) % 4
            if step == 0 and controller.current_animation is not CharState.IDLE:
                controller.is_flipped_x = False
                controller.is_flipped_y = False
                controller.play(animation=CharState.IDLE)
            elif step == 1 and controller.current_animation is not CharState.RUN:
                controller.play(animation=CharState.RUN)
            elif step == 2:
                controller.is_flipped_x = True
            elif step == 3:
                controller.is_flipped_y = True

        if renderer.needs_paint:
            print_state(controller, renderer, loop.clock.time)

    loop.on_frame = on_frame
    await loop.run_async(duration=seconds)

    controller.dispose()
    print("=" * 60)
    print("Demo Complete!")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Sprite sheet playback demo")
    parser.add_argument("demo", nargs="?", default="eyes", choices=["char", "eyes", "sparkles"])
    parser.add_argument("--seconds", type=float, default=3.0, help="How long to play")
    parser.add_argument("--fps", type=int, default=30, help="Loop frames per second")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log controller events")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_demo(args.demo, args.seconds, args.fps))


if __name__ == "__main__":
    main()
