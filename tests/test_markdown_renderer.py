import pytest
from bs4 import BeautifulSoup

from markdown_renderer import RendererConfig, create_renderer, heading_slug


def soup(html_content):
    return BeautifulSoup(html_content, 'html.parser')


@pytest.mark.parametrize('text, expected', [
    ('Hello World', 'hello-world'),
    ('  Part   Two  ', 'part-two'),
    ('Part 2: Ranges', 'part-2%3A-ranges'),
    ("Don't panic!", "don't-panic!"),
])
def test_heading_slug(text, expected):
    assert heading_slug(text) == expected


def test_heading_gets_permalink():
    heading = soup(create_renderer().render('# Hello World')).h1

    assert heading['id'] == 'hello-world'
    assert heading['tabindex'] == '-1'
    link = heading.a
    assert link['class'] == ['app-link--heading']
    assert link['href'] == '#hello-world'
    assert link.span.get_text() == 'Hello World'


def test_heading_ids_are_stable():
    text = '## Parsing the input\n\nSome text\n\n## Part 2\n'
    renderer = create_renderer()

    assert renderer.render(text) == renderer.render(text)
    assert renderer.render(text) == create_renderer().render(text)


def test_duplicate_headings_get_distinct_ids():
    headings = soup(create_renderer().render('## Part 1\n\n## Part 1\n')).find_all('h2')

    assert [h['id'] for h in headings] == ['part-1', 'part-1-1']
    assert [h.a['href'] for h in headings] == ['#part-1', '#part-1-1']


def test_existing_ids_are_not_reused():
    headings = soup(create_renderer().render('## Part 1\n\n## Part 1\n\n## Part 1 1\n')).find_all('h2')

    assert len({h['id'] for h in headings}) == 3


def test_heading_without_permalink():
    heading = soup(create_renderer({'heading_permalinks': False}).render('## Part 2')).h2

    assert heading['id'] == 'part-2'
    assert heading.a is None
    assert heading.get_text() == 'Part 2'


def test_definition_list():
    dl = soup(create_renderer().render('Term\n: The definition\n')).dl

    assert dl.dt.get_text() == 'Term'
    assert dl.dd.get_text() == 'The definition'


def test_math_is_left_for_the_client():
    html_content = create_renderer().render('The answer is $x^2$.\n')

    assert 'arithmatex' in html_content
    assert 'x^2' in html_content


def test_fenced_code_block():
    pre = soup(create_renderer().render('```python\nx = 1\n```\n')).pre

    assert pre['class'] == ['hljs']
    assert pre.code['class'] == ['code-block', 'python']
    assert pre.code.get_text().rstrip('\n') == 'x = 1'


def test_fenced_code_unknown_language():
    html_content = create_renderer().render('```nonexistent-lang\na < b\n```\n')

    assert '<pre class="hljs"><code class="code-block nonexistent-lang">a &lt; b' in html_content
    assert '<span' not in html_content


def test_fenced_code_without_language():
    html_content = create_renderer().render('```\nplain\n```\n')

    assert '<pre class="hljs"><code class="code-block ">plain' in html_content


def test_fenced_code_slugified_language():
    code = soup(create_renderer().render('```C++\nint main() { return 0; }\n```\n')).pre.code

    assert code['class'] == ['code-block', 'c-']


def test_fenced_code_in_list_item():
    text = '1. Parse it:\n\n    ```rust\n    let x = a < b;\n    ```\n'
    pre = soup(create_renderer().render(text)).li.pre

    assert pre['class'] == ['hljs']
    assert pre.code['class'] == ['code-block', 'rust']
    assert pre.code.get_text().rstrip('\n') == 'let x = a < b;'


def test_fenced_code_in_blockquote():
    text = '> Quoted:\n>\n> ```rust\n> let x = 1;\n> ```\n'
    pre = soup(create_renderer().render(text)).blockquote.pre

    assert pre.code['class'] == ['code-block', 'rust']
    assert pre.code.get_text().rstrip('\n') == 'let x = 1;'


def test_longer_fence_keeps_inner_fences():
    text = '````markdown\n```rust\nlet x = 1;\n```\n````\n'
    code = soup(create_renderer().render(text)).pre.code

    assert code['class'] == ['code-block', 'markdown']
    assert code.get_text().rstrip('\n') == '```rust\nlet x = 1;\n```'


def test_raw_html_passes_through_by_default():
    html_content = create_renderer().render('<div class="note">hi</div>\n')

    assert '<div class="note">hi</div>' in html_content


def test_raw_html_escaped_when_disabled():
    html_content = create_renderer({'base_opts': {'html': False}}).render('<div class="note">hi</div>\n')

    assert '&lt;div' in html_content
    assert '<div' not in html_content


def test_typographer():
    assert '&ldquo;' in create_renderer().render('He said "hi"')
    assert '&ldquo;' not in create_renderer({'base_opts': {'typographer': False}}).render('He said "hi"')


def test_breaks():
    assert '<br' not in create_renderer().render('one\ntwo')
    assert '<br' in create_renderer({'base_opts': {'breaks': True}}).render('one\ntwo')


def test_linkify():
    text = 'See https://adventofcode.com for the puzzles'

    assert '<a' not in create_renderer().render(text)
    assert 'href="https://adventofcode.com"' in create_renderer({'base_opts': {'linkify': True}}).render(text)


def test_default_options():
    renderer = create_renderer()

    assert renderer.config == RendererConfig(breaks=False, html=True, linkify=False, typographer=True)
    assert renderer.heading_permalinks is True


def test_overrides_only_touch_named_options():
    renderer = create_renderer({'base_opts': {'html': False}})

    assert renderer.config == RendererConfig(breaks=False, html=False, linkify=False, typographer=True)
    assert renderer.heading_permalinks is True


def test_unknown_option_is_rejected():
    with pytest.raises(TypeError):
        create_renderer({'base_opts': {'xhtml': True}})


def test_renderer_is_callable():
    renderer = create_renderer()

    assert renderer('plain') == renderer.render('plain') == '<p>plain</p>'
