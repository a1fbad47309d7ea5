"""Loading and drawing image textures onto a target surface."""

from __future__ import annotations

import logging
from typing import Union

import pygame

logger = logging.getLogger(__name__)

RectLike = Union[pygame.Rect, tuple]


class TextureManager:
    """Loads images and copies regions of them onto a screen surface."""

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen

    def load_texture(self, path) -> pygame.Surface | None:
        """Load an image, or return None (and log) if it cannot be read."""
        try:
            image = pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            logger.error("Failed to load image: %s, Error: %s", path, exc)
            return None
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        return image

    def draw(self, texture: pygame.Surface | None, src: RectLike, dest: RectLike) -> None:
        """Copy the src region of a texture, scaled, into the dest rectangle."""
        self._copy(texture, src, dest, flip_horizontal=False)

    def draw_flipped(
        self,
        texture: pygame.Surface | None,
        src: RectLike,
        dest: RectLike,
        flip_horizontal: bool,
    ) -> None:
        """Like draw, optionally mirroring the image left to right."""
        self._copy(texture, src, dest, flip_horizontal=flip_horizontal)

    def _copy(self, texture, src, dest, flip_horizontal: bool) -> None:
        if texture is None:
            return
        src = pygame.Rect(src)
        dest = pygame.Rect(dest)
        if src.w <= 0 or src.h <= 0 or dest.w <= 0 or dest.h <= 0:
            return
        clipped = src.clip(texture.get_rect())
        if clipped.w == 0 or clipped.h == 0:
            return
        if clipped != src:
            sx = dest.w / src.w
            sy = dest.h / src.h
            dest = pygame.Rect(
                round(dest.x + (clipped.x - src.x) * sx),
                round(dest.y + (clipped.y - src.y) * sy),
                max(1, round(clipped.w * sx)),
                max(1, round(clipped.h * sy)),
            )
        image = texture.subsurface(clipped)
        if image.get_size() != dest.size:
            image = pygame.transform.scale(image, dest.size)
        if flip_horizontal:
            image = pygame.transform.flip(image, True, False)
        self.screen.blit(image, dest.topleft)