import pytest

from thebeast.tilemap import COLS, ROWS, TILE_SIZE, Tile, TileMap


class FakeTextures:
    def __init__(self):
        self.loaded = []
        self.drawn = []

    def load_texture(self, path):
        self.loaded.append(path)
        return path

    def draw(self, texture, src, dest):
        self.drawn.append((texture, tuple(src), tuple(dest)))


@pytest.fixture
def level_one():
    return TileMap(FakeTextures(), False)


@pytest.fixture
def level_two():
    return TileMap(FakeTextures(), True)


def test_loads_three_terrain_textures():
    textures = FakeTextures()
    TileMap(textures, False)
    assert textures.loaded == ["assets/water.png", "assets/grass.png", "assets/dirt.png"]


def test_grid_dimensions(level_one, level_two):
    for tile_map in (level_one, level_two):
        assert len(tile_map.tiles) == ROWS
        assert all(len(row) == COLS for row in tile_map.tiles)


def test_borders_are_water(level_one, level_two):
    for tile_map in (level_one, level_two):
        assert all(tile == Tile.WATER for tile in tile_map.tiles[0])
        assert all(row[0] == Tile.WATER for row in tile_map.tiles)
        assert all(row[-1] == Tile.WATER for row in tile_map.tiles)


def test_level_two_last_row_padded_with_water(level_two):
    assert all(tile == Tile.WATER for tile in level_two.tiles[ROWS - 1])


def test_tile_lookup_level_one(level_one):
    assert level_one.tile_at(0, 0) == Tile.WATER
    assert level_one.tile_at(TILE_SIZE, TILE_SIZE) == Tile.GRASS
    assert level_one.tile_at(144, 192) == Tile.DIRT


def test_tile_lookup_level_two(level_two):
    assert level_two.tile_at(TILE_SIZE, TILE_SIZE) == Tile.DIRT


def test_tile_at_matches_grid(level_one):
    for row in range(ROWS):
        for col in range(COLS):
            x = col * TILE_SIZE + TILE_SIZE - 1
            y = row * TILE_SIZE
            assert level_one.tile_at(x, y) == level_one.tiles[row][col]


def test_out_of_bounds_is_outside(level_one):
    assert level_one.tile_at(COLS * TILE_SIZE, 0) == Tile.OUTSIDE
    assert level_one.tile_at(0, ROWS * TILE_SIZE) == Tile.OUTSIDE
    assert level_one.tile_at(-TILE_SIZE, 0) == Tile.OUTSIDE


def test_small_negative_coordinate_truncates_to_first_tile(level_one):
    assert level_one.tile_at(-10, 5) == Tile.WATER


def test_draw_covers_every_tile():
    textures = FakeTextures()
    tile_map = TileMap(textures, False)
    tile_map.draw()
    assert len(textures.drawn) == ROWS * COLS
    first_texture, first_src, first_dest = textures.drawn[0]
    assert first_texture == "assets/water.png"
    assert first_src == (0, 0, TILE_SIZE, TILE_SIZE)
    assert first_dest == (0, 0, TILE_SIZE, TILE_SIZE)
    texture, _, dest = textures.drawn[COLS + 1]
    assert dest == (TILE_SIZE, TILE_SIZE, TILE_SIZE, TILE_SIZE)
    assert texture == "assets/grass.png"