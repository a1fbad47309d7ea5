from unittest import mock

import pygame
import pytest

from thebeast.main import main


@pytest.fixture
def headless(monkeypatch, tmp_path):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    monkeypatch.chdir(tmp_path)


def test_main_exits_cleanly_on_quit(headless):
    with mock.patch("pygame.event.get", return_value=[pygame.event.Event(pygame.QUIT)]) as get:
        result = main([])
    assert result == 0
    assert get.call_count >= 1
    assert not pygame.display.get_init()


def test_main_rejects_unknown_option(headless):
    with pytest.raises(SystemExit) as excinfo:
        main(["--no-such-option"])
    assert excinfo.value.code == 2