# config.py

import os

# --- Site configuration ---
SITE_TITLE = "Advent of Code 2025"
SITE_AUTHOR = "Jeff Horton"

# Prepended to every generated site URL by the `url` filter, e.g. "/advent-of-code-2025"
PATH_PREFIX = os.environ.get('PATH_PREFIX', '')

# --- Directories ---
# Solution sources live next to the site, one file per day: day_<N>.rs
SOLUTIONS_DIR = os.environ.get('SOLUTIONS_DIR', os.path.join('..', 'src'))
CONTENT_DIR = os.environ.get('CONTENT_DIR', 'content')
BUILD_DIR = os.environ.get('BUILD_DIR', '_site')
TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), 'templates')
ASSETS_DIR = 'assets'

# Layout applied to every page unless its front matter says otherwise
DEFAULT_LAYOUT = 'layout.html'

# --- Solution metadata ---
SOLUTION_FILE_PATTERN = r'day_(\d+)\.rs'
SOLUTION_HEADER_PATTERN = r'\[Advent of Code - Day \d+: _([^_]+)_]\(([^)]+)\)'
DOCUMENTATION_URL = '/advent_of_code_2025/day_{day}/index.html'
SOURCE_URL = 'https://github.com/kamioftea/advent-of-code-2025/blob/main/src/day_{day}.rs'

# Collection whose pages are the per-day write ups
POSTS_COLLECTION = 'post'

# --- Markdown configuration ---
# 1. Base options, any of which can be overridden with `base_opts`
MARKDOWN_BASE_OPTS = {
    'breaks': False,       # single newlines stay soft breaks
    'html': True,          # raw HTML passes through
    'linkify': False,      # bare URLs are not turned into links
    'typographer': True,   # smart quotes and dashes
}

# 2. Heading anchors
HEADING_PERMALINK_CLASS = 'app-link--heading'
HEADING_TABINDEX = '-1'

# 3. Code blocks
CODE_PRE_CLASS = 'hljs'
CODE_BLOCK_CLASS = 'code-block'
PYGMENTS_STYLE = 'default'
PYGMENTS_CSS_FILE = 'pygments.css'
# --- Markdown configuration end ---

# --- Output ---
MINIFY_HTML = True

# Words the inclusive language check warns about
INCLUSIVE_LANGUAGE_WORDS = [
    'simply',
    'obviously',
    'basically',
    'of course',
    'clearly',
    'just',
    'everyone knows',
    'however',
    'easy',
]
