"""Setup routines that populate each scene's content.

World coordinates have their origin at the window centre with y pointing up.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .geometry import ORIGIN, Transform, Vec2
from .hover import Color, Hoverable, HoverTracker
from .scenes import Label, Scene, SceneContent, SceneSetup

if TYPE_CHECKING:
    from .pipeline import GameContext

logger = logging.getLogger(__name__)

# Large enough to cover any window.
FULL_SCREEN = 99999.0

START_GREEN: Color = (0, 228, 48)
START_GREEN_HOVER: Color = (0, 117, 44)
CREDITS_BLUE: Color = (0, 121, 241)
CREDITS_BLUE_HOVER: Color = (0, 82, 172)
RETURN_BLUE: Color = (106, 118, 251)
RETURN_BLUE_HOVER: Color = (4, 16, 149)

# (idle, hover) per pattern symbol: red, green, blue, yellow.
PAD_COLORS: tuple[tuple[Color, Color], ...] = (
    ((254, 205, 205), (252, 156, 156)),
    ((209, 254, 205), (164, 252, 156)),
    ((205, 209, 254), (156, 164, 252)),
    ((254, 254, 205), (252, 252, 156)),
)


def add_scene_change_button(
    content: SceneContent,
    *,
    text: str,
    color: Color,
    hover_color: Color,
    width: float,
    height: float,
    transform: Transform,
    scene: Scene,
) -> Hoverable:
    button = Hoverable(
        tracker=HoverTracker.from_rect(width, height),
        transform=transform,
        color=color,
        hover_color=hover_color,
        unhover_color=color,
    )
    content.add_control(button, scene)
    content.add_label(Label(text, transform.translation, size=60))
    return button


def _add_full_screen_control(content: SceneContent, scene: Scene) -> None:
    content.add_control(Hoverable(tracker=HoverTracker.from_rect(FULL_SCREEN, FULL_SCREEN)), scene)


def _bottom_left(ctx: GameContext) -> Vec2:
    w, h = ctx.world_size
    return Vec2(-w / 2.0, -h / 2.0)


def setup_click_to_start(ctx: GameContext) -> SceneContent:
    content = SceneContent()
    _add_full_screen_control(content, Scene.MAIN_MENU)
    content.add_label(Label("Click anywhere to begin", ORIGIN, size=60))
    return content


def setup_main_menu(ctx: GameContext) -> SceneContent:
    content = SceneContent()
    add_scene_change_button(
        content,
        text="Start Game",
        color=START_GREEN,
        hover_color=START_GREEN_HOVER,
        width=275.0,
        height=60.0,
        transform=Transform.from_xy(0.0, 0.0),
        scene=Scene.GAME,
    )
    add_scene_change_button(
        content,
        text="Credits",
        color=CREDITS_BLUE,
        hover_color=CREDITS_BLUE_HOVER,
        width=180.0,
        height=60.0,
        transform=Transform.from_xy(0.0, -80.0),
        scene=Scene.CREDITS,
    )

    bl = _bottom_left(ctx)
    content.add_label(
        Label(f"High Score: {ctx.high_score}", Vec2(bl.x + 10.0, bl.y), size=80, anchor="bottomleft")
    )
    return content


def setup_credits(ctx: GameContext) -> SceneContent:
    content = SceneContent()
    _add_full_screen_control(content, Scene.MAIN_MENU)
    content.add_label(Label("Game by Stephen Molyneaux 2024", ORIGIN, size=80))
    content.add_label(Label("Created with pygame", Vec2(0.0, -80.0), size=40))
    content.add_label(Label("Click to Return", Vec2(0.0, -220.0), size=60))
    return content


def setup_game(ctx: GameContext) -> SceneContent:
    ctx.engine.start()

    w, h = ctx.world_size
    center = ORIGIN
    tl = Vec2(-w / 2.0, h / 2.0)
    tr = Vec2(w / 2.0, h / 2.0)
    bl = Vec2(-w / 2.0, -h / 2.0)
    br = Vec2(w / 2.0, -h / 2.0)

    corners = ((tl, tr), (tr, br), (bl, br), (tl, bl))

    content = SceneContent()
    for symbol, ((b, c), (idle, hover)) in enumerate(zip(corners, PAD_COLORS)):
        content.add_pad(
            Hoverable(
                tracker=HoverTracker.from_triangle(center, b, c),
                disabled=True,
                color=idle,
                hover_color=hover,
                unhover_color=idle,
                symbol=symbol,
            )
        )

    content.prompt = content.add_label(Label("Memorize", ORIGIN, size=80))
    return content


def setup_score(ctx: GameContext) -> SceneContent:
    score = ctx.engine.score
    content = SceneContent()
    content.add_label(Label(f"Score: {score}", ORIGIN, size=80))

    if score > ctx.high_score:
        ctx.old_high_score = ctx.high_score
        ctx.high_score = score
        ctx.store.save_high_score(score)
        logger.info("New high score %d (was %d)", score, ctx.old_high_score)
        content.add_label(Label("NEW HIGH SCORE!", Vec2(0.0, 80.0), size=80))
        content.add_label(Label(f"Old High Score: {ctx.old_high_score}", Vec2(0.0, -80.0), size=80))
    else:
        content.add_label(Label(f"High Score: {ctx.high_score}", Vec2(0.0, -80.0), size=80))

    add_scene_change_button(
        content,
        text="Click to return",
        color=RETURN_BLUE,
        hover_color=RETURN_BLUE_HOVER,
        width=500.0,
        height=60.0,
        transform=Transform.from_xy(0.0, -240.0),
        scene=Scene.MAIN_MENU,
    )
    return content


def setup_for(scene: Scene) -> SceneSetup | None:
    if scene is Scene.CLICK_TO_START:
        return setup_click_to_start
    if scene is Scene.MAIN_MENU:
        return setup_main_menu
    if scene is Scene.CREDITS:
        return setup_credits
    if scene is Scene.GAME:
        return setup_game
    if scene is Scene.SCORE:
        return setup_score
    return None
