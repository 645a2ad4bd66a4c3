"""Curated views worth revisiting."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .renderer import Viewport
from .state import ViewState


@dataclass(frozen=True)
class Preset:
    name: str
    function_key: str
    viewport: Viewport
    aspect_ratio: str
    color_scheme: str
    max_iterations: int
    resolution: int
    description: str
    even_iterations_only: bool = False

    def to_state(self) -> ViewState:
        return ViewState(
            resolution=self.resolution,
            function_key=self.function_key,
            max_iterations=self.max_iterations,
            color_scheme=self.color_scheme,
            viewport=self.viewport,
            aspect_ratio=self.aspect_ratio,
            even_iterations_only=self.even_iterations_only,
        )


PRESETS: Mapping[str, Preset] = MappingProxyType({
    "default": Preset(
        name="Default View",
        function_key="z³ - 1",
        viewport=Viewport(-3.0, 3.0, -3.0, 3.0),
        aspect_ratio="1:1",
        color_scheme="rainbow",
        max_iterations=50,
        resolution=300,
        description="Classic threefold symmetry view",
    ),
    "frog": Preset(
        name="Frog",
        function_key="z⁵ - z²",
        viewport=Viewport(-0.6263950634, -0.4597957096, -0.5324579177, -0.4387079177),
        aspect_ratio="16:9",
        color_scheme="rainbow",
        max_iterations=30,
        resolution=1100,
        description="Intricate frog-like structure in zoomed basin boundary",
    ),
    "fireburst": Preset(
        name="Fireburst",
        function_key="sin(z²) - 1",
        viewport=Viewport(0.0856043782, 0.1688848350, -1.2730556074, -1.2261806074),
        aspect_ratio="16:9",
        color_scheme="fire",
        max_iterations=50,
        resolution=1200,
        description="Explosive radial burst pattern with swirling detail",
    ),
    "goofy": Preset(
        name="Goofy",
        function_key="z·exp(z) - 1",
        viewport=Viewport(-2.4349296537, -2.1015963203, -0.2447240259, 0.0886093074),
        aspect_ratio="1:1",
        color_scheme="rainbow",
        max_iterations=50,
        resolution=700,
        description="Playful organic patterns in Lambert W function fractal",
    ),
    "reach": Preset(
        name="Reach",
        function_key="z⁶ + z³ - 1",
        viewport=Viewport(-0.7247869693, -0.7234868122, -0.0007213406, 0.0000110813),
        aspect_ratio="16:9",
        color_scheme="hsv-32",
        max_iterations=50,
        resolution=1300,
        description="Extreme close-up revealing intricate fractal tendrils",
    ),
    "deadhead": Preset(
        name="Deadhead",
        function_key="z⁵ + z - 1",
        viewport=Viewport(-0.6271252514, -0.6245201941, 0.0002386781, 0.0017035218),
        aspect_ratio="16:9",
        color_scheme="hsv-8",
        max_iterations=50,
        resolution=1300,
        description="Deep zoom into chaotic basin boundaries with vivid colors",
        even_iterations_only=True,
    ),
    "miwok": Preset(
        name="Miwok",
        function_key="z⁵ + z - 1",
        viewport=Viewport(-1.0134875006, 0.3205045942, -0.3613636364, 0.3886363636),
        aspect_ratio="16:9",
        color_scheme="marin",
        max_iterations=20,
        resolution=900,
        description="Marin County landscape colors in high-contrast fractal form",
        even_iterations_only=True,
    ),
})
