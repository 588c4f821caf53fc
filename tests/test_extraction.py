"""
Tests for code block extraction.
"""

from promptpage.models import GeneratedArtifactSet
from promptpage.pipeline.extraction import (
    CodeBlockExtractor,
    compose_code_blocks,
    compose_preview,
    extract_code_blocks,
)


def test_extract_all_three_blocks(generated_output):
    """Each field equals the trimmed content of its fence."""
    artifacts = extract_code_blocks(generated_output)

    assert artifacts.html == '<form id="contact">\n  <input name="name">\n</form>'
    assert artifacts.css == "form { display: grid; }"
    assert artifacts.js == ""


def test_extract_only_html_block():
    """Missing fences leave only their own fields empty."""
    text = "```html\n<h1>Hello</h1>\n```\nNo styling needed."

    artifacts = extract_code_blocks(text)

    assert artifacts == GeneratedArtifactSet(html="<h1>Hello</h1>", css="", js="")


def test_unclosed_fence_is_not_extracted():
    assert extract_code_blocks("```html\n<div>").html == ""


def test_unclosed_fence_does_not_affect_other_languages():
    text = "```css\nbody { margin: 0; }\n```\n```javascript\nconsole.log(1);"

    artifacts = extract_code_blocks(text)

    assert artifacts.css == "body { margin: 0; }"
    assert artifacts.js == ""


def test_whitespace_only_block_is_empty():
    assert extract_code_blocks("```css\n   \n\t\n```").css == ""


def test_first_block_wins_for_repeated_language():
    text = (
        "```html\n<p>first</p>\n```\n"
        "```css\np { color: red; }\n```\n"
        "```html\n<p>second</p>\n```\n"
    )

    artifacts = extract_code_blocks(text)

    assert artifacts.html == "<p>first</p>"
    assert "second" not in artifacts.html


def test_language_tags_are_case_insensitive():
    text = "```HTML\n<b>x</b>\n```\n```Css\nb {}\n```\n```JavaScript\nlet a = 1;\n```"

    artifacts = extract_code_blocks(text)

    assert artifacts.html == "<b>x</b>"
    assert artifacts.css == "b {}"
    assert artifacts.js == "let a = 1;"


def test_js_short_tag():
    assert extract_code_blocks("```js\nalert('hi');\n```").js == "alert('hi');"


def test_json_fence_is_not_javascript():
    text = '```json\n{"a": 1}\n```\n```js\nrun();\n```'

    assert extract_code_blocks(text).js == "run();"


def test_no_fences_yields_empty_set():
    artifacts = extract_code_blocks("Sorry, I cannot help with that.")

    assert artifacts.is_empty()


def test_extraction_is_idempotent(generated_output):
    assert extract_code_blocks(generated_output) == extract_code_blocks(generated_output)


def test_extract_block_single_language():
    text = "```css\na { }\n```"

    assert CodeBlockExtractor.extract_block(text, "css") == "a { }"
    assert CodeBlockExtractor.extract_block(text, "html") == ""


def test_composed_blocks_are_extractable():
    """validate_only feeds composed text to the model; it keeps the fence contract."""
    text = compose_code_blocks("<main></main>", "main { }", "init();")

    assert extract_code_blocks(text) == GeneratedArtifactSet(
        html="<main></main>", css="main { }", js="init();"
    )


def test_compose_preview_fragment():
    artifacts = GeneratedArtifactSet(html="<h1>Hi</h1>", css="h1 { color: red; }", js="go();")

    preview = compose_preview(artifacts, title="Demo")

    assert preview.startswith("<!DOCTYPE html>")
    assert "<title>Demo</title>" in preview
    assert "h1 { color: red; }" in preview
    assert preview.index("<h1>Hi</h1>") < preview.index("go();")


def test_compose_preview_full_document():
    """A full document keeps its own structure; css and js are injected."""
    html = "<!DOCTYPE html><html><head><title>T</title></head><body><p>x</p></body></html>"
    artifacts = GeneratedArtifactSet(html=html, css="p { }", js="run();")

    preview = compose_preview(artifacts)

    assert preview.count("<html") == 1
    assert preview.index("p { }") < preview.index("</head>")
    assert preview.index("run();") < preview.index("</body>")
