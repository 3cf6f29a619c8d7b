# computed.py

from typing import Any, Dict, Iterable, List, Optional

import config
from solutions import derive_solutions


def page_title(fields: Dict[str, Any]) -> str:
    if fields.get('title'):
        return fields['title']
    parts = [fields.get('header'), config.SITE_TITLE, config.SITE_AUTHOR]
    return ' | '.join(str(p) for p in parts if p)


def page_description(fields: Dict[str, Any]) -> Optional[str]:
    if fields.get('description'):
        return fields['description']
    if fields.get('day') and fields.get('header'):
        return f"A walkthrough of my solution for {config.SITE_TITLE} - {fields['header']}"
    return None


def build_post_index(posts: Iterable[Dict[str, Any]]) -> Dict[int, str]:
    """day -> url for every post that has a day and is written out."""
    index = {}
    for post in posts:
        day = post['data'].get('day')
        if day is None or not post.get('url'):
            continue
        try:
            index[int(day)] = post['url']
        except (TypeError, ValueError):
            print(f"Warning: {post.get('input_path', post['url'])} has day {day!r}, which is not a number; no write up link for it")
    return index


def compute_global_data(collections: Dict[str, List[Dict[str, Any]]],
                        solutions_dir: str = config.SOLUTIONS_DIR) -> Dict[str, Any]:
    """Data shared by every page of a build, computed once."""
    post_index = build_post_index(collections.get(config.POSTS_COLLECTION, []))
    return {
        'solutions': derive_solutions(solutions_dir, post_index),
    }


def compute_page_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Per page values, recomputed for every page."""
    return {
        'title': page_title(fields),
        'description': page_description(fields),
    }
