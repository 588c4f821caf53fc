"""
Extraction of fenced HTML, CSS and JavaScript blocks from model output.
"""

import re
from typing import Dict, Pattern

from promptpage.models import GeneratedArtifactSet


# Opening fence, language tag as a whole word, then a lazy capture up to the
# first closing fence. An unclosed fence never matches.
FENCE_PATTERNS: Dict[str, Pattern] = {
    "html": re.compile(r"```html\b(.*?)```", re.IGNORECASE | re.DOTALL),
    "css": re.compile(r"```css\b(.*?)```", re.IGNORECASE | re.DOTALL),
    "js": re.compile(r"```(?:javascript|js)\b(.*?)```", re.IGNORECASE | re.DOTALL),
}


class CodeBlockExtractor:
    """Parses generation responses into separate source artifacts."""

    @staticmethod
    def extract_block(text: str, language: str) -> str:
        """
        Extract the first fenced block for one language.

        Args:
            text: Raw model response.
            language: One of "html", "css", "js".

        Returns:
            Trimmed block content, or "" if no closed block was found.
        """
        match = FENCE_PATTERNS[language].search(text)
        if not match:
            return ""
        return match.group(1).strip()

    @classmethod
    def extract(cls, text: str) -> GeneratedArtifactSet:
        """
        Extract HTML, CSS and JavaScript blocks from a model response.

        Each language is searched independently; a missing or malformed
        block for one language leaves only that field empty.

        Args:
            text: Raw model response.

        Returns:
            GeneratedArtifactSet with absent blocks as empty strings.
        """
        return GeneratedArtifactSet(
            html=cls.extract_block(text, "html"),
            css=cls.extract_block(text, "css"),
            js=cls.extract_block(text, "js"),
        )


def extract_code_blocks(text: str) -> GeneratedArtifactSet:
    return CodeBlockExtractor.extract(text or "")


def compose_code_blocks(html: str, css: str, js: str) -> str:
    """Rebuild a single fenced-block text from separate sources."""
    return (
        f"```html\n{html}\n```\n\n"
        f"```css\n{css}\n```\n\n"
        f"```javascript\n{js}\n```\n"
    )


PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>
{css}
  </style>
</head>
<body>
{html}
  <script>
{js}
  </script>
</body>
</html>
"""


def compose_preview(artifacts: GeneratedArtifactSet, title: str = "Preview") -> str:
    """
    Combine extracted sources into one standalone HTML document.

    If the generated HTML is already a full document, the stylesheet is
    injected before </head> and the script before </body> instead.
    """
    html = artifacts.html
    if re.search(r"<html\b", html, re.IGNORECASE):
        if artifacts.css:
            html = _insert_before(html, "</head>", f"<style>\n{artifacts.css}\n</style>\n")
        if artifacts.js:
            html = _insert_before(html, "</body>", f"<script>\n{artifacts.js}\n</script>\n")
        return html

    return PREVIEW_TEMPLATE.format(
        title=title,
        css=artifacts.css,
        html=html,
        js=artifacts.js,
    )


def _insert_before(document: str, closing_tag: str, snippet: str) -> str:
    index = document.lower().rfind(closing_tag)
    if index == -1:
        return document + "\n" + snippet
    return document[:index] + snippet + document[index:]
