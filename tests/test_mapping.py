import math

import pytest

from colorbook.mapping import (
    Bounds,
    OrthographicView,
    SubRegion,
    UiSpace,
    WorldSpace,
    map_to_texel,
)


def test_ui_pointer_flips_vertical_axis():
    space = UiSpace(100, 50)
    assert map_to_texel((0, 0), space, target_size=(10, 5)) == (0, 4)
    assert map_to_texel((99, 49), space, target_size=(10, 5)) == (9, 0)
    assert map_to_texel((50, 25), space, target_size=(10, 5)) == (5, 2)


def test_ui_pointer_scales_to_target_resolution():
    space = UiSpace(200, 200)
    assert map_to_texel((150, 50), space, target_size=(1024, 512)) == (768, 384)


def test_ui_pointer_is_always_in_range():
    space = UiSpace(320, 240)
    size = (64, 32)
    values = [-1e12, -1.0, 0.0, 0.5, 319.99, 320.0, 1e12, math.inf, -math.inf, math.nan]
    for x in values:
        for y in values:
            tx, ty = map_to_texel((x, y), space, target_size=size)
            assert 0 <= tx < size[0]
            assert 0 <= ty < size[1]


def test_ui_pointer_on_zero_sized_element_maps_to_edge():
    assert map_to_texel((5, 5), UiSpace(0, 0), target_size=(8, 8)) == (0, 7)


def test_ui_defaults_target_to_sub_region_size():
    region = SubRegion(0, 0, 4, 4)
    assert map_to_texel((0, 0), UiSpace(8, 8), sub_region=region) == (0, 3)


def test_ui_without_target_uses_element_pixels():
    assert map_to_texel((0, 0), UiSpace(8, 4)) == (0, 3)
    assert map_to_texel((7.5, 3.5), UiSpace(8, 4)) == (7, 0)
    assert map_to_texel((3, 3), UiSpace(0, 0)) == (0, 0)


def test_degenerate_target_sizes_map_to_first_texel():
    space = UiSpace(100, 100)
    assert map_to_texel((50, 50), space, target_size=(0, 0)) == (0, 0)
    assert map_to_texel((50, 50), space, target_size=(-4, 3)) == (0, 1)
    world = WorldSpace(bounds=Bounds(0.0, 0.0, 1.0, 1.0))
    assert map_to_texel((0.5, 0.5), world, SubRegion(0, 0, 0, 0)) == (0, 0)
    assert map_to_texel((0.5, 0.5), world, target_size=(0, -1)) == (0, 0)


def test_world_without_sub_region_spans_target():
    space = WorldSpace(bounds=Bounds(0.0, 0.0, 2.0, 2.0))
    assert map_to_texel((1.0, 1.0), space, target_size=(10, 20)) == (5, 10)
    assert map_to_texel((1.0, 1.0), space) == (0, 0)


def test_view_without_screen_size_is_rejected_at_construction():
    view = OrthographicView(center=(0.0, 0.0), half_height=1.0, aspect=1.0)
    with pytest.raises(ValueError):
        WorldSpace(bounds=Bounds(0.0, 0.0, 1.0, 1.0), view=view)


def test_sub_region_needs_positive_scale():
    with pytest.raises(ValueError):
        SubRegion(0, 0, 4, 4, pixels_per_unit=0)


def test_screen_to_world_uses_visible_size():
    view = OrthographicView(center=(1.0, 2.0), half_height=5.0, aspect=2.0)
    assert view.visible_size == (20.0, 10.0)
    assert view.screen_to_world((100, 50), (200, 100)) == (1.0, 2.0)
    assert view.screen_to_world((0, 0), (200, 100)) == (-9.0, 7.0)


def test_world_bounds_follow_pivot_and_scale():
    region = SubRegion(10, 20, 50, 40, pivot=(25, 20), pixels_per_unit=10)
    bounds = region.world_bounds((0.0, 0.0))
    assert bounds == Bounds(min_x=-2.5, min_y=-2.0, width=5.0, height=4.0)


def test_world_pointer_maps_into_sub_region():
    region = SubRegion(10, 20, 50, 40, pivot=(25, 20), pixels_per_unit=10)
    space = WorldSpace(bounds=region.world_bounds((0.0, 0.0)))
    assert map_to_texel((0.0, 0.0), space, region) == (35, 40)
    assert map_to_texel((-2.5, -2.0), space, region) == (10, 20)


def test_world_pointer_through_view():
    region = SubRegion.full((64, 64), pixels_per_unit=32)
    view = OrthographicView(center=(0.0, 0.0), half_height=1.0, aspect=1.0)
    space = WorldSpace(bounds=region.world_bounds((0.0, 0.0)), view=view, screen_size=(100, 100))
    assert map_to_texel((0, 0), space, region, target_size=(64, 64)) == (0, 63)
    assert map_to_texel((50, 50), space, region, target_size=(64, 64)) == (32, 32)


def test_world_pointer_clamps_to_sub_region_without_canvas():
    region = SubRegion(10, 20, 50, 40)
    space = WorldSpace(bounds=Bounds(0.0, 0.0, 1.0, 1.0))
    assert map_to_texel((100.0, 100.0), space, region) == (59, 59)
    assert map_to_texel((-100.0, -100.0), space, region) == (10, 20)


def test_world_pointer_clamps_to_canvas_when_known():
    region = SubRegion(10, 20, 50, 40)
    space = WorldSpace(bounds=Bounds(0.0, 0.0, 1.0, 1.0))
    assert map_to_texel((100.0, 100.0), space, region, target_size=(128, 64)) == (127, 63)
    assert map_to_texel((-100.0, -100.0), space, region, target_size=(128, 64)) == (0, 0)


def test_sub_region_must_fit_atlas():
    assert SubRegion.inside((64, 64), 0, 0, 64, 64).size == (64, 64)
    with pytest.raises(ValueError):
        SubRegion.inside((64, 64), 32, 0, 64, 64)


def test_world_pointer_is_always_in_range():
    region = SubRegion(10, 20, 50, 40, pivot=(25, 20), pixels_per_unit=10)
    view = OrthographicView(center=(0.0, 0.0), half_height=3.0, aspect=1.5)
    spaces = [
        WorldSpace(bounds=region.world_bounds((0.0, 0.0))),
        WorldSpace(bounds=region.world_bounds((0.0, 0.0)), view=view, screen_size=(320, 240)),
    ]
    values = [-1e12, -3.0, 0.0, 2.5, 1e12, math.inf, -math.inf, math.nan]
    for space in spaces:
        for x in values:
            for y in values:
                tx, ty = map_to_texel((x, y), space, region)
                assert 10 <= tx <= 59
                assert 20 <= ty <= 59
                tx, ty = map_to_texel((x, y), space, region, target_size=(128, 64))
                assert 0 <= tx < 128
                assert 0 <= ty < 64
