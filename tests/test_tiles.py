import numpy as np
import pytest

from claheq.errors import EmptyInputError, ErrorKind, TileGridTooFineError
from claheq.histogram import build_histogram, clip_histogram
from claheq.mapping import area_based_mapping, identity_mapping
from claheq.tiles import TileGrid, build_tile_mappings, check_image, check_tile_count, tile_bounds


@pytest.mark.parametrize("shape,grid", [((256, 256), (8, 8)), ((61, 83), (8, 8)), ((7, 5), (5, 7)), ((10, 3), (1, 1))])
def test_tiles_cover_image_exactly(shape, grid):
    H, W = shape
    cover = np.zeros(shape, dtype=int)
    for t in tile_bounds(W, H, *grid):
        cover[t.slices] += 1
    assert np.all(cover == 1)


def test_remainder_goes_to_last_column_and_row():
    tiles = tile_bounds(83, 61, 8, 8)
    assert len(tiles) == 64
    widths = {t.col: t.width for t in tiles}
    heights = {t.row: t.height for t in tiles}
    assert all(widths[c] == 10 for c in range(7)) and widths[7] == 10 + 3
    assert all(heights[r] == 7 for r in range(7)) and heights[7] == 7 + 5
    last = tiles[-1]
    assert (last.col, last.row, last.x, last.y) == (7, 7, 70, 49)


def test_tiles_are_row_major():
    tiles = tile_bounds(40, 30, 4, 3)
    assert [t.coord for t in tiles[:5]] == [(0, 0), (1, 0), (2, 0), (3, 0), (0, 1)]


def test_grid_too_fine():
    with pytest.raises(TileGridTooFineError) as exc:
        tile_bounds(7, 100, 8, 8)
    assert exc.value.kind is ErrorKind.TILE_GRID_TOO_FINE
    with pytest.raises(TileGridTooFineError):
        tile_bounds(100, 7, 8, 8)


def test_grid_must_have_tiles():
    with pytest.raises(ValueError):
        tile_bounds(10, 10, 0, 2)


def test_empty_image():
    with pytest.raises(EmptyInputError):
        check_image(np.zeros((0, 5), dtype=np.uint8))
    with pytest.raises(EmptyInputError):
        tile_bounds(0, 5, 1, 1)


def test_check_image_shape_and_dtype():
    with pytest.raises(ValueError):
        check_image(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(TypeError):
        check_image(np.zeros((4, 4), dtype=np.float32))


def test_tile_centers_use_base_tile_size():
    g = TileGrid(83, 61, 8, 8)
    assert g.tile_width == 10 and g.tile_height == 7
    assert g.center(0, 0) == (5.0, 3.5)
    assert g.center(7, 7) == (75.0, 52.5)


def test_mappings_match_per_tile_pipeline(noisy_odd):
    grid = build_tile_mappings(noisy_odd, 3.0, tiles_horizontal=4, tiles_vertical=3)
    assert grid.mappings.shape == (3, 4, 256)
    for t in grid.tiles:
        h = clip_histogram(build_histogram(noisy_odd[t.slices]), 3.0)
        np.testing.assert_array_equal(grid.lookup_table(t.col, t.row), area_based_mapping(h))


def test_mappings_are_frozen(noisy_odd):
    grid = build_tile_mappings(noisy_odd)
    with pytest.raises(ValueError):
        grid.mappings[0, 0, 0] = 1


def test_unbuilt_grid_has_no_mappings():
    g = TileGrid(16, 16, 2, 2)
    assert not g.is_built
    with pytest.raises(RuntimeError):
        g.mappings


def test_custom_mapping_function_is_used(noisy_odd):
    calls = []

    def spy(hist):
        calls.append(int(hist.sum()))
        return identity_mapping(hist)

    grid = build_tile_mappings(noisy_odd, 0, spy, 2, 2)
    assert len(calls) == 4
    assert sum(calls) == noisy_odd.size
    assert np.all(grid.mappings == np.arange(256, dtype=np.uint8))


def test_bad_mapping_output_rejected(noisy_odd):
    with pytest.raises(ValueError):
        build_tile_mappings(noisy_odd, 40.0, lambda h: np.zeros(10), 2, 2)


def test_threaded_build_matches_inline(noisy_odd):
    a = build_tile_mappings(noisy_odd, 2.0, workers=1)
    b = build_tile_mappings(noisy_odd, 2.0, workers=4)
    np.testing.assert_array_equal(a.mappings, b.mappings)


@pytest.mark.parametrize("count", [2.5, 2.7, "2.5", np.float64(1.2), float("nan")])
def test_tile_counts_must_be_integral(count):
    with pytest.raises(ValueError):
        tile_bounds(10, 10, count, 1)
    with pytest.raises(ValueError):
        TileGrid(10, 10, 1, count)


def test_integral_tile_counts_accepted():
    assert check_tile_count(np.int32(3)) == 3
    assert check_tile_count(2.0) == 2
    assert check_tile_count("4") == 4
    assert len(tile_bounds(10, 10, 2.0, np.int64(5))) == 10
    with pytest.raises(TypeError):
        check_tile_count(True)
    with pytest.raises(TypeError):
        check_tile_count(None)
