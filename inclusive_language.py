# inclusive_language.py

import re
from typing import List, Sequence

from bs4 import BeautifulSoup

import config


def visible_text(html_content: str) -> str:
    """Text of the rendered page, minus code and math which aren't prose."""
    soup = BeautifulSoup(html_content, 'html.parser')
    for el in soup.find_all(['pre', 'code', 'script', 'style']):
        el.extract()
    for el in soup.find_all(class_='arithmatex'):
        el.extract()
    return soup.get_text(' ')


def find_words(html_content: str, words: Sequence[str] = tuple(config.INCLUSIVE_LANGUAGE_WORDS)) -> List[str]:
    """Each listed word/phrase found in the page, in list order, once."""
    text = visible_text(html_content)
    found = []
    for word in words:
        pattern = r'\b' + r'\s+'.join(re.escape(w) for w in word.split()) + r'\b'
        if re.search(pattern, text, re.IGNORECASE):
            found.append(word)
    return found


def check_page(input_path: str, html_content: str) -> List[str]:
    found = find_words(html_content)
    for word in found:
        print(f"   -> [INCLUSIVE LANGUAGE] {input_path}: be careful with \"{word}\"")
    return found
