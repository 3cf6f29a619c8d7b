# autobuild.py

import argparse
import os
import shutil
import sys
from typing import Any, Dict, List, Optional

from jinja2 import TemplateError

import config
import generator
import inclusive_language
from computed import compute_global_data
from highlight import HighlightConfig
from parser import build_collections, collect_pages


def copy_assets(build_dir: str, assets_dir: str = config.ASSETS_DIR,
                highlight_config: Optional[HighlightConfig] = None) -> None:
    output_dir = os.path.join(build_dir, os.path.basename(assets_dir))
    if os.path.exists(assets_dir):
        shutil.copytree(assets_dir, output_dir, dirs_exist_ok=True)
    else:
        os.makedirs(output_dir, exist_ok=True)

    stylesheet = (highlight_config or HighlightConfig()).stylesheet()
    with open(os.path.join(output_dir, config.PYGMENTS_CSS_FILE), 'w', encoding='utf-8') as f:
        f.write(stylesheet)


def render_pages(pages: List[Dict[str, Any]], global_data: Dict[str, Any],
                 collections: Dict[str, List[Dict[str, Any]]], content_dir: str, build_dir: str) -> List[str]:
    written = []
    for page in pages:
        if not page['url']:
            print(f"   -> [SKIPPED] {page['input_path']} (permalink: false)")
            continue

        context = generator.page_context(page, global_data, collections, content_dir)
        content = generator.render_content(page, context)
        if page['template_format'] == 'md':
            inclusive_language.check_page(page['input_path'], content)

        path = generator.write_page(build_dir, page['url'], generator.apply_layout(content, context))
        print(f"Generated: {path}")
        written.append(path)
    return written


def build_site(content_dir: str = config.CONTENT_DIR,
               build_dir: str = config.BUILD_DIR,
               solutions_dir: str = config.SOLUTIONS_DIR,
               assets_dir: str = config.ASSETS_DIR) -> List[str]:
    """
    Full build. Any I/O or template error is raised to the caller; there is
    no partially successful build.
    """
    print("\n" + "=" * 40)
    print("   STARTING BUILD PROCESS")
    print("=" * 40 + "\n")

    print("[1/4] Preparing build directory and copying assets...")
    os.makedirs(build_dir, exist_ok=True)
    copy_assets(build_dir, assets_dir)

    print("\n[2/4] Reading content...")
    pages = collect_pages(content_dir)
    collections = build_collections(pages)
    print(f"   -> {len(pages)} pages, {len(collections.get(config.POSTS_COLLECTION, []))} posts")

    print("\n[3/4] Computing solution data...")
    global_data = compute_global_data(collections, solutions_dir)
    print(f"   -> {len(global_data['solutions'])} solutions in {solutions_dir}")

    print("\n[4/4] Generating HTML...")
    written = render_pages(pages, global_data, collections, content_dir, build_dir)

    print("\nBUILD COMPLETE")
    return written


def main(argv: Optional[List[str]] = None) -> int:
    arg_parser = argparse.ArgumentParser(description="Build the Advent of Code write up site")
    arg_parser.add_argument('--content', default=config.CONTENT_DIR, help="content directory")
    arg_parser.add_argument('--output', default=config.BUILD_DIR, help="build output directory")
    arg_parser.add_argument('--solutions', default=config.SOLUTIONS_DIR, help="directory holding day_<N>.rs")
    args = arg_parser.parse_args(argv)

    try:
        build_site(args.content, args.output, args.solutions)
    except (OSError, TemplateError) as e:
        print(f"Build failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
