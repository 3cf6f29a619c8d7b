# solutions.py

import os
import re
from typing import Any, Dict, List, Optional, Tuple

import config

SOLUTION_FILE_RE = re.compile(config.SOLUTION_FILE_PATTERN)
SOLUTION_HEADER_RE = re.compile(config.SOLUTION_HEADER_PATTERN)


def parse_solution_header(line: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Pull the puzzle title and URL out of a solution's first line, e.g.

        //! This is my solution for [Advent of Code - Day 1: _Secret Entrance_](https://adventofcode.com/2025/day/1)

    Returns (None, None) when the line doesn't have that shape.
    """
    match = SOLUTION_HEADER_RE.search(line)
    if not match:
        return None, None
    return match.group(1), match.group(2)


def first_line(contents: str) -> str:
    return re.split(r'[\n\r]+', contents, maxsplit=1)[0]


def build_links(day: int, puzzle_url: Optional[str], post_index: Dict[int, str]) -> Dict[str, Optional[str]]:
    links = {'Puzzle': puzzle_url}
    # Only days with a published post get a write up link
    if day in post_index:
        links['Write Up'] = post_index[day]
    links['Documentation'] = config.DOCUMENTATION_URL.format(day=day)
    links['Source'] = config.SOURCE_URL.format(day=day)
    return links


def build_day(file_path: str, day: int, post_index: Dict[int, str]) -> Dict[str, Any]:
    # only the first line is used, a stray non UTF-8 byte further down must not stop the build
    with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
        contents = f.read()

    title, puzzle_url = parse_solution_header(first_line(contents))

    return {
        'day': day,
        'title': title,
        'links': build_links(day, puzzle_url, post_index),
    }


def derive_solutions(source_dir: str, post_index: Dict[int, str]) -> List[Dict[str, Any]]:
    """
    One record per day_<N>.rs file in source_dir, sorted by day. Read errors
    are not caught: a build without the full list of days is not useful.
    """
    solutions = []
    with os.scandir(source_dir) as entries:
        for entry in entries:
            match = SOLUTION_FILE_RE.fullmatch(entry.name)
            if not match or not entry.is_file():
                continue
            day = int(match.group(1))
            # days are numbered from 1
            if day < 1:
                continue
            solutions.append(build_day(entry.path, day, post_index))

    return sorted(solutions, key=lambda s: s['day'])
