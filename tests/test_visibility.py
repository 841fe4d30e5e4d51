"""Field-of-view tests.

Arena: open_grid(20, 20) is a walled 20x20 with everything inside the border
carved, so only the border blocks sight unless a test adds a pillar.
"""

from delve.world.fov import compute_fov, line, update_visibility

from tests.dungeon_test_utils import open_grid


def test_line_includes_both_endpoints():
    pts = list(line(0, 0, 4, 2))
    assert pts[0] == (0, 0) and pts[-1] == (4, 2)
    assert len(pts) == 5


def test_origin_always_visible():
    grid = open_grid()
    assert (5, 5) in compute_fov(grid, (5, 5), 0)


def test_deterministic_for_same_inputs():
    grid = open_grid()
    grid[8][6].block_sight = True
    first = compute_fov(grid, (5, 5), 6)
    second = compute_fov(grid, (5, 5), 6)
    assert first == second


def test_radius_boundary_in_open_room():
    grid = open_grid()
    origin = (10, 10)
    radius = 4
    visible = compute_fov(grid, origin, radius)
    for x in range(1, 19):
        for y in range(1, 19):
            d2 = (x - 10) ** 2 + (y - 10) ** 2
            if d2 <= radius * radius:
                assert (x, y) in visible, f"{(x, y)} within radius but hidden"
            else:
                assert (x, y) not in visible, f"{(x, y)} beyond radius but visible"


def test_pillar_hides_tile_behind_it():
    grid = open_grid()
    origin = (5, 10)
    target = (9, 10)
    assert target in compute_fov(grid, origin, 8)
    grid[7][10].block_sight = True
    visible = compute_fov(grid, origin, 8)
    assert target not in visible
    # The pillar itself is seen
    assert (7, 10) in visible


def test_update_marks_seen_and_clears_stale_visibility():
    grid = open_grid()
    update_visibility(grid, (3, 3), 3)
    assert grid[3][5].currently_visible and grid[3][5].ever_seen
    update_visibility(grid, (15, 15), 3)
    assert not grid[3][5].currently_visible
    assert grid[3][5].ever_seen
    assert grid[15][15].currently_visible


def test_walls_block_view_outside_room():
    grid = open_grid()
    # Interior wall splitting the arena at x == 10
    for y in range(20):
        grid[10][y].blocked = True
        grid[10][y].block_sight = True
    visible = compute_fov(grid, (5, 5), 12)
    assert (10, 5) in visible
    assert not any(x > 10 for x, _ in visible)
