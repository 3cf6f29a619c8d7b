import pytest

import config


@pytest.fixture
def solutions_dir(tmp_path):
    src = tmp_path / 'src'
    src.mkdir()
    headers = {
        1: 'Secret Entrance',
        2: 'Gift Shop',
        10: 'Factory',
    }
    for day, title in headers.items():
        (src / f'day_{day}.rs').write_text(
            f'//! This is my solution for [Advent of Code - Day {day}: _{title}_]'
            f'(https://adventofcode.com/2025/day/{day})\n'
            '//!\n'
            '\n'
            'pub fn run() {}\n',
            encoding='utf-8',
        )
    return src


@pytest.fixture(autouse=True)
def no_path_prefix(monkeypatch):
    monkeypatch.setattr(config, 'PATH_PREFIX', '')
