import pygame
import pytest

from spaceraid.app import (
    _explosion_frame_rect,
    _load_image,
    _scaled,
    _to_screen,
    main,
)
from spaceraid.components import (
    EXPLOSION_COLUMNS,
    EXPLOSION_FRAME_SIZE,
    EXPLOSION_LEN,
    EXPLOSION_ROWS,
    PLAYER_SIZE,
    PLAYER_SPRITE,
    WINDOW_SIZE,
    WinSize,
)


@pytest.fixture(autouse=True)
def _headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


def test_origin_maps_to_window_centre():
    win = WinSize(*WINDOW_SIZE)
    assert _to_screen(0.0, 0.0, win) == (win.w / 2.0, win.h / 2.0)


def test_world_up_is_screen_up():
    win = WinSize(*WINDOW_SIZE)
    assert _to_screen(0.0, 10.0, win)[1] < _to_screen(0.0, 0.0, win)[1]
    assert _to_screen(10.0, 0.0, win)[0] > _to_screen(0.0, 0.0, win)[0]


def test_explosion_frames_tile_the_sheet():
    size = EXPLOSION_FRAME_SIZE
    assert _explosion_frame_rect(0) == pygame.Rect(0, 0, size, size)
    assert _explosion_frame_rect(EXPLOSION_COLUMNS + 1) == pygame.Rect(size, size, size, size)
    frames = [_explosion_frame_rect(i) for i in range(EXPLOSION_LEN)]
    assert len({tuple(r) for r in frames}) == EXPLOSION_LEN
    union = frames[0].unionall(frames[1:])
    assert union == pygame.Rect(0, 0, EXPLOSION_COLUMNS * size, EXPLOSION_ROWS * size)


def test_missing_image_falls_back_to_box(tmp_path):
    image = _load_image(tmp_path / "missing.png", (30.0, 40.0), (255, 0, 0))
    assert image.get_size() == (30, 40)


def test_existing_image_is_loaded(tmp_path):
    path = tmp_path / "ship.png"
    pygame.image.save(pygame.Surface((20, 10)), str(path))
    image = _load_image(path, (99.0, 99.0), (0, 0, 0))
    assert image.get_size() == (20, 10)


def test_scaled_halves_size():
    assert _scaled(pygame.Surface((100, 50)), 0.5).get_size() == (50, 25)


def test_main_runs_given_frames_without_assets(tmp_path):
    assert main(["--frames", "5", "--assets", str(tmp_path), "--seed", "1"]) == 0


def test_main_runs_with_a_real_sprite(tmp_path):
    w, h = PLAYER_SIZE
    pygame.image.save(pygame.Surface((int(w), int(h))), str(tmp_path / PLAYER_SPRITE))
    assert main(["--frames", "3", "--assets", str(tmp_path), "--fps", "120"]) == 0


@pytest.mark.parametrize("args", [["--frames", "-1"], ["--fps", "0"], ["--frames", "x"]])
def test_main_rejects_bad_arguments(args):
    with pytest.raises(SystemExit) as excinfo:
        main(args)
    assert excinfo.value.code == 2