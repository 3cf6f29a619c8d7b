# generator.py

import os
from typing import Any, Dict, List, Optional

import minify_html
from jinja2 import Environment, FileSystemLoader, pass_context
from markupsafe import Markup

import config
from computed import compute_page_fields
from markdown_renderer import MarkdownRenderer, create_renderer
from parser import output_path, split_front_matter

# --- Markdown renderers, configured once ---
RENDERERS = {
    True: create_renderer(),
    False: create_renderer({'heading_permalinks': False}),
}


# --- URLs ---

def get_path_prefix() -> str:
    """PATH_PREFIX normalised to '' or '/some/prefix' (no trailing slash)."""
    prefix = config.PATH_PREFIX.strip()
    if not prefix or prefix == '/':
        return ''
    prefix = prefix.strip('/')
    return f'/{prefix}'


def make_internal_url(path: str) -> str:
    """Prefix a root-relative site URL with PATH_PREFIX. Anything else is left alone."""
    if not path:
        return ""
    if not path.startswith('/') or path.startswith('//'):
        return path
    return f"{get_path_prefix()}{path}"


# --- Template helpers ---

def render_markdown(text: str, heading_permalinks: bool = True) -> Markup:
    return Markup(RENDERERS[bool(heading_permalinks)].render(text))


@pass_context
def render_file(context, path: str, heading_permalinks: bool = True) -> Markup:
    """Render another content file (Markdown or HTML) inside the current template."""
    content_dir = context.get('site', {}).get('content_dir', config.CONTENT_DIR)
    file_path = os.path.join(content_dir, path)
    with open(file_path, 'r', encoding='utf-8') as f:
        data, body = split_front_matter(f.read(), path)

    rendered = context.environment.from_string(body).render({**context.get_all(), **data})
    if path.endswith('.md'):
        return render_markdown(rendered, heading_permalinks)
    return Markup(rendered)


def create_environment(template_dir: str = config.TEMPLATE_DIR) -> Environment:
    environment = Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True
    )
    environment.filters['url'] = make_internal_url
    environment.filters['render_markdown'] = render_markdown
    environment.globals['render_file'] = render_file
    return environment


env = create_environment()


# --- Page rendering ---

def minify_html_content(html_content: str) -> str:
    return minify_html.minify(
        html_content,
        keep_comments=False,
        minify_css=True,
        minify_js=True,
    )


def page_context(page: Dict[str, Any], global_data: Dict[str, Any],
                 collections: Dict[str, List[Dict[str, Any]]], content_dir: str) -> Dict[str, Any]:
    fields = page['data']
    return {
        **global_data,
        **fields,
        **compute_page_fields(fields),
        'page': {
            'url': page['url'],
            'input_path': page['input_path'],
            'file_slug': page['file_slug'],
            'date': fields.get('date'),
        },
        'collections': collections,
        'site': {
            'title': config.SITE_TITLE,
            'author': config.SITE_AUTHOR,
            'path_prefix': get_path_prefix(),
            'content_dir': content_dir,
        },
    }


def render_content(page: Dict[str, Any], context: Dict[str, Any],
                   renderer: Optional[MarkdownRenderer] = None,
                   environment: Optional[Environment] = None) -> str:
    """The page body without its layout: Jinja first, then Markdown for .md files."""
    environment = environment or env
    content = environment.from_string(page['body']).render(context)
    if page['template_format'] == 'md':
        content = (renderer or RENDERERS[True]).render(content)
    return content


def apply_layout(content: str, context: Dict[str, Any], environment: Optional[Environment] = None) -> str:
    layout = context.get('layout', config.DEFAULT_LAYOUT)
    if not layout:
        return content
    template = (environment or env).get_template(layout)
    return template.render({**context, 'content': Markup(content)})


def write_page(build_dir: str, url: str, html_content: str) -> str:
    path = output_path(build_dir, url)
    os.makedirs(os.path.dirname(path), exist_ok=True)

    if config.MINIFY_HTML:
        html_content = minify_html_content(html_content)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(html_content)
    return path
