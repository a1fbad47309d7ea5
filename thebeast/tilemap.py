"""The tile grid of each level and its collision lookup."""

from __future__ import annotations

from enum import IntEnum

TILE_SIZE = 48
ROWS = 20
COLS = 27


class Tile(IntEnum):
    """Kinds of terrain; OUTSIDE marks a point beyond the map."""

    OUTSIDE = -1
    WATER = 0
    GRASS = 1
    DIRT = 2


_LEVEL_ONE = (
    "000000000000000000000000000",
    "011102222110012220011111210",
    "012102112210022120022212120",
    "012211000122221000111212210",
    "012220011211121110002212220",
    "001111122100122211112102210",
    "000012221100210022211001120",
    "000112100112210121121101210",
    "001122000211221211222102120",
    "012221001221112222112100210",
    "011111111122001211211100210",
    "000122210012212200112210210",
    "001221100121111001121110110",
    "012210001110022211001222210",
    "012100001100222221000211110",
    "011000000001211122100111210",
    "000000000011110012211101120",
    "000000000001100012221000200",
    "000000000000110011121001000",
    "000000000000011111110000000",
)

_LEVEL_TWO = (
    "000000000000000000000000000",
    "022201110222211102221112220",
    "020201010200200102020010220",
    "020201010222210102022210020",
    "022201010000010102000111020",
    "000201011111010112220101020",
    "022201000001010000020101020",
    "020001112201111122020111020",
    "020222002002000200020002020",
    "020200022211122211122202020",
    "020201110010000000100102020",
    "020202220111111110111102020",
    "020200000000000010000002020",
    "022221111222222011111222220",
    "002200002000002000002000020",
    "022222202222112112222222020",
    "020000200002002002000002020",
    "022211222202222222022212220",
    "000000000000000000000000000",
)


def _build_grid(rows: tuple[str, ...]) -> tuple[tuple[Tile, ...], ...]:
    """Turn digit rows into a ROWS x COLS grid, padding gaps with water."""
    grid = [
        tuple(Tile(int(ch)) for ch in row.ljust(COLS, "0")[:COLS]) for row in rows[:ROWS]
    ]
    grid.extend((Tile.WATER,) * COLS for _ in range(ROWS - len(grid)))
    return tuple(grid)


class TileMap:
    """A level's terrain grid, drawable through a texture manager."""

    def __init__(self, textures, second_level: bool = False) -> None:
        self.textures = textures
        self._images = {
            Tile.WATER: textures.load_texture("assets/water.png"),
            Tile.GRASS: textures.load_texture("assets/grass.png"),
            Tile.DIRT: textures.load_texture("assets/dirt.png"),
        }
        self.tiles = _build_grid(_LEVEL_TWO if second_level else _LEVEL_ONE)

    def tile_at(self, x: int, y: int) -> Tile:
        """Return the tile under a pixel position, or OUTSIDE beyond the grid."""
        col = int(x / TILE_SIZE)
        row = int(y / TILE_SIZE)
        if 0 <= row < ROWS and 0 <= col < COLS:
            return self.tiles[row][col]
        return Tile.OUTSIDE

    def draw(self) -> None:
        src = (0, 0, TILE_SIZE, TILE_SIZE)
        for row, tiles in enumerate(self.tiles):
            for col, tile in enumerate(tiles):
                dest = (col * TILE_SIZE, row * TILE_SIZE, TILE_SIZE, TILE_SIZE)
                self.textures.draw(self._images[tile], src, dest)