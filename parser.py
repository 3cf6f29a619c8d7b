# parser.py

import os
import re
from datetime import datetime, date
from typing import Any, Dict, List, Optional, Tuple

import yaml

import config

CONTENT_EXTENSIONS = ('.md', '.html')

FRONT_MATTER_RE = re.compile(r'---\s*\n(.*?)\n---\s*\n', re.DOTALL)


def standardize_date(dt_obj: Any, fallback: date) -> date:
    if isinstance(dt_obj, datetime):
        return dt_obj.date()
    elif isinstance(dt_obj, date):
        return dt_obj
    return fallback


def split_front_matter(content: str, source: str = '<string>') -> Tuple[Dict[str, Any], str]:
    """Split '--- yaml ---' front matter from the body. Bad YAML is reported and ignored."""
    match = FRONT_MATTER_RE.match(content)
    if not match:
        return {}, content

    body = content[len(match.group(0)):]
    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        print(f"Warning: could not parse YAML front matter in {source}: {exc}")
        metadata = {}

    if not isinstance(metadata, dict):
        print(f"Warning: front matter in {source} is not a mapping, ignoring it")
        metadata = {}
    return metadata, body


def normalize_tags(tags: Any) -> List[str]:
    if not tags:
        return []
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(',')]
    return [str(t) for t in tags if t]


def page_url(relative_path: str, permalink: Any = None) -> Optional[str]:
    """
    'index.md' -> '/', 'posts/day-1.md' -> '/posts/day-1/'.
    A front matter permalink wins; `permalink: false` means the page isn't written.
    """
    if permalink is False:
        return None
    if permalink:
        url = str(permalink)
        return url if url.startswith('/') else f'/{url}'

    path = os.path.splitext(relative_path.replace('\\', '/'))[0]
    if os.path.basename(path) == 'index':
        path = os.path.dirname(path)
    path = path.strip('/')
    return f'/{path}/' if path else '/'


def output_path(build_dir: str, url: str) -> str:
    relative = url.lstrip('/')
    if not relative or relative.endswith('/'):
        relative = f'{relative}index.html'
    return os.path.join(build_dir, *relative.split('/'))


def read_page(file_path: str, content_dir: str) -> Dict[str, Any]:
    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read()

    relative_path = os.path.relpath(file_path, content_dir).replace('\\', '/')
    data, body = split_front_matter(content, relative_path)

    modified = date.fromtimestamp(os.path.getmtime(file_path))
    data['date'] = standardize_date(data.get('date'), modified)
    data['tags'] = normalize_tags(data.get('tags'))

    url = page_url(relative_path, data.get('permalink'))

    return {
        'input_path': relative_path,
        'file_slug': os.path.splitext(os.path.basename(relative_path))[0],
        'template_format': os.path.splitext(relative_path)[1].lstrip('.'),
        'url': url,
        'data': data,
        'body': body,
    }


def collect_pages(content_dir: str = config.CONTENT_DIR) -> List[Dict[str, Any]]:
    """Every .md / .html file under content_dir, in date then path order."""
    pages = []
    for root, dirs, files in os.walk(content_dir):
        # skip hidden and underscore directories, e.g. drafts kept in _drafts
        dirs[:] = sorted(d for d in dirs if not d.startswith(('.', '_')))
        for file_name in sorted(files):
            if file_name.endswith(CONTENT_EXTENSIONS):
                pages.append(read_page(os.path.join(root, file_name), content_dir))

    return sorted(pages, key=lambda p: (p['data']['date'], p['input_path']))


def build_collections(pages: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    collections: Dict[str, List[Dict[str, Any]]] = {'all': list(pages)}
    for page in pages:
        for tag in page['data']['tags']:
            collections.setdefault(tag, []).append(page)
    return collections
