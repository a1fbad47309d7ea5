"""Components that give entities position, looks, input, health and AI."""

from __future__ import annotations

import logging
from typing import Callable

import pygame

from thebeast.ecs import Component
from thebeast.tilemap import Tile
from thebeast.vector import Vector2D

logger = logging.getLogger(__name__)

FRAME_TIME = 1.0 / 60.0
HEALTH_BAR_COLOUR = (255, 0, 0, 255)
HEALTH_BAR_HEIGHT = 5
HEALTH_BAR_OFFSET = 10


class TransformComponent(Component):
    """Position, velocity, size and speed of an entity."""

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        height: int = 32,
        width: int = 32,
        scale: float = 1.0,
    ) -> None:
        self.position = Vector2D(float(x), float(y))
        self.velocity = Vector2D()
        self.height = height
        self.width = width
        self.scale = scale
        self.base_speed = 3.0
        self.current_speed = self.base_speed

    def init(self) -> None:
        self.velocity = Vector2D()

    def update(self) -> None:
        """Clamp the velocity to the base speed and move by it."""
        magnitude = self.velocity.magnitude()
        if magnitude > self.base_speed:
            self.velocity = self.velocity / magnitude * self.base_speed
        self.position = self.position + self.velocity * self.current_speed

    def set_speed(self, speed: float) -> None:
        self.current_speed = speed

    def reset_speed(self) -> None:
        self.current_speed = self.base_speed


class SpriteComponent(Component):
    """Draws an entity with idle, walking and attacking animations."""

    def __init__(
        self,
        textures,
        idle_path=None,
        walk_path=None,
        attack_path=None,
        animated: bool = False,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.textures = textures
        self.clock = clock if clock is not None else pygame.time.get_ticks
        self.animated = animated
        self.walk_frames = 6
        self.attack_frames = 6
        self.speed = 100
        self.is_attacking = False
        self.attack_timer = 0.0
        self.is_moving = False
        self.flip_horizontal = False
        self.transform: TransformComponent | None = None
        self.src_rect = pygame.Rect(0, 0, 0, 0)
        self.dest_rect = pygame.Rect(0, 0, 0, 0)
        self._idle = self._walk = self._attack = None
        self._load(idle_path, walk_path, attack_path)

    def _load(self, idle_path, walk_path, attack_path) -> None:
        self._idle = self._load_one(idle_path)
        self._walk = self._load_one(walk_path)
        self._attack = self._load_one(attack_path)

    def _load_one(self, path):
        if path is None:
            return None
        return self.textures.load_texture(path)

    def init(self) -> None:
        self.transform = self.entity.get_component(TransformComponent)
        self.src_rect = pygame.Rect(0, 0, self.transform.width, self.transform.height)

    def _frame_x(self, frames: int) -> int:
        return self.src_rect.w * ((int(self.clock()) // self.speed) % frames)

    def update(self) -> None:
        transform = self.transform
        if transform is None:
            return
        velocity = transform.velocity
        self.is_moving = velocity.x != 0 or velocity.y != 0
        if velocity.x < 0:
            self.flip_horizontal = True
        elif velocity.x > 0:
            self.flip_horizontal = False

        if self.animated:
            if self.is_attacking:
                self.src_rect.x = self._frame_x(self.attack_frames)
                self.src_rect.y = 0
                self.attack_timer -= FRAME_TIME
                if self.attack_timer <= 0:
                    self.is_attacking = False
            elif self.is_moving:
                self.src_rect.x = self._frame_x(self.walk_frames)
                self.src_rect.y = 0
            else:
                self.src_rect.x = 0
                self.src_rect.y = 0

        self.dest_rect = pygame.Rect(
            int(transform.position.x),
            int(transform.position.y),
            int(transform.width * transform.scale),
            int(transform.height * transform.scale),
        )

    def draw(self) -> None:
        if self.transform is None:
            return
        if self.is_attacking and self._attack is not None:
            texture = self._attack
        elif self.is_moving and self._walk is not None:
            texture = self._walk
        elif self._idle is not None:
            texture = self._idle
        else:
            logger.warning("SpriteComponent: Cannot draw texture")
            return
        self.textures.draw_flipped(texture, self.src_rect, self.dest_rect, self.flip_horizontal)

    def play_attack(self) -> None:
        """Start the attack animation for half a second."""
        if self.attack_frames > 0:
            self.is_attacking = True
            self.attack_timer = 0.5

    def update_textures(self, idle_path, walk_path, attack_path) -> None:
        """Replace all three animation textures."""
        self._load(idle_path, walk_path, attack_path)


class KeyboardController(Component):
    """Steers an entity with W/A/S/D and attacks with the space bar."""

    def __init__(self, key_state: Callable | None = None) -> None:
        self.key_state = key_state if key_state is not None else pygame.key.get_pressed
        self.transform: TransformComponent | None = None

    def init(self) -> None:
        self.transform = self.entity.get_component(TransformComponent)

    def update(self) -> None:
        state = self.key_state()
        velocity = Vector2D()
        if state[pygame.K_w]:
            velocity.y = -1
        if state[pygame.K_s]:
            velocity.y = 1
        if state[pygame.K_a]:
            velocity.x = -1
        if state[pygame.K_d]:
            velocity.x = 1

        if state[pygame.K_SPACE]:
            self.entity.get_component(SpriteComponent).play_attack()

        magnitude = velocity.magnitude()
        if magnitude > 0:
            velocity = velocity / magnitude
        self.transform.velocity = velocity


class HealthComponent(Component):
    """Hit points with a health bar drawn above the entity."""

    def __init__(self, hp: int, surface: pygame.Surface | None = None) -> None:
        self.health = hp
        self.max_health = hp
        self.surface = surface
        self.transform: TransformComponent | None = None

    def init(self) -> None:
        self.transform = self.entity.get_component(TransformComponent)

    def draw(self) -> None:
        if self.transform is None:
            return
        surface = self.surface if self.surface is not None else pygame.display.get_surface()
        if surface is None:
            return
        bar = pygame.Rect(
            int(self.transform.position.x),
            int(self.transform.position.y - HEALTH_BAR_OFFSET),
            int(self.transform.width * (self.health / float(self.max_health))),
            HEALTH_BAR_HEIGHT,
        )
        pygame.draw.rect(surface, HEALTH_BAR_COLOUR, bar)

    def take_damage(self, damage: int) -> None:
        """Lose health, keeping it between zero and the maximum."""
        self.health = max(0, min(self.max_health, self.health - damage))

    def is_dead(self) -> bool:
        return self.health <= 0

    def add_health(self, amount: int) -> None:
        self.take_damage(-amount)


class EnemyAIComponent(Component):
    """Chases the player across land and attacks when close."""

    def __init__(self, player_transform, game_map, boss: bool = False, sound=None) -> None:
        self.player_transform: TransformComponent | None = player_transform
        self.map = game_map
        self.is_boss = boss
        self.sound = sound
        self.attack_range = 70.0
        self.chase_range = 200.0
        self.attack_cooldown = 1.0
        self.attack_timer = 0.0
        self.transform: TransformComponent | None = None
        self.sprite: SpriteComponent | None = None

    def init(self) -> None:
        self.transform = self.entity.get_component(TransformComponent)
        self.sprite = self.entity.get_component(SpriteComponent)

    @property
    def damage(self) -> int:
        return 20 if self.is_boss else 10

    def _play_sound(self) -> None:
        if self.sound is None:
            return
        if self.sound.play() is None:
            logger.warning("Failed to play attack sound!")

    def _on_land(self, position: Vector2D) -> bool:
        w = self.transform.width
        h = self.transform.height
        corners = (
            position,
            position + Vector2D(w - 1, 0),
            position + Vector2D(0, h - 1),
            position + Vector2D(w - 1, h - 1),
        )
        return all(
            self.map.tile_at(int(corner.x), int(corner.y)) != Tile.WATER for corner in corners
        )

    def update(self) -> None:
        if self.player_transform is None:
            return
        transform = self.transform
        direction = self.player_transform.position - transform.position
        distance = direction.magnitude()

        if self.attack_timer > 0:
            self.attack_timer -= FRAME_TIME

        transform.velocity = Vector2D()

        if distance > self.chase_range:
            return

        if distance < self.attack_range and self.attack_timer <= 0:
            self.sprite.play_attack()
            player_health = self.player_transform.entity.get_component(HealthComponent)
            player_health.take_damage(self.damage)
            self._play_sound()
            self.attack_timer = self.attack_cooldown

        if distance > self.attack_range:
            if distance > 1.0:
                direction = direction / distance
            new_position = transform.position + direction * transform.current_speed
            if self._on_land(new_position):
                transform.velocity = direction