"""Integration tests converting whole documents."""

import pytest

from rxmd import MarkdownParser, parse


@pytest.mark.integration
class TestDocuments:
    """End-to-end conversion of multi-feature documents."""

    def test_quick_start(self):
        """The quick-start snippet converts as documented."""
        html = parse("# Hello World\n\nThis is **bold** and *italic*.")
        assert "<h1>Hello World</h1>" in html
        assert "<p>This is <strong>bold</strong> and <em>italic</em>.</p>" in html

    def test_every_feature(self, sample_markdown):
        """Every built-in feature appears in one document."""
        html = MarkdownParser().parse(sample_markdown)

        for fragment in (
            "<h1>Title</h1>",
            '<a href="https://example.com">link</a>',
            '<img src="logo.png" alt="Logo">',
            '<pre><code class="javascript">const x = 42;</code></pre>',
            "<ul>\n  <li>List item 1</li>\n  <li>List item 2</li>\n</ul>",
            "<ol>\n  <li>First</li>\n  <li>Second</li>\n</ol>",
            "<blockquote>Quote here</blockquote>",
            "<strong>bold</strong>",
            "<em>italic</em>",
            "<del>deleted</del>",
            "<code>code</code>",
            "<hr>",
        ):
            assert fragment in html

    def test_blocks_not_wrapped_in_paragraphs(self, sample_markdown):
        """Block elements never end up inside <p>."""
        html = MarkdownParser().parse(sample_markdown)
        for tag in ("h1", "pre", "ul", "ol", "blockquote", "hr"):
            assert f"<p><{tag}" not in html

    def test_code_block_protects_markup(self):
        """Markdown inside a fence is emitted literally."""
        html = parse("Intro\n\n```md\n# Title\n**bold** [x](y)\n```\n\nOutro")
        assert "<h1>" not in html
        assert "<strong>" not in html
        assert "<a " not in html
        assert html.startswith("<p>Intro</p>")
        assert html.endswith("<p>Outro</p>")

    def test_custom_pipeline(self, highlight):
        """Custom transforms combine with the built-ins."""
        md = MarkdownParser().register(highlight, before="paragraphs")
        html = md.parse("- ==one==\n- two\n\nSome ==marked== text")
        assert "<li><mark>one</mark></li>" in html
        assert "<p>Some <mark>marked</mark> text</p>" in html

    def test_rebuild_from_scratch(self):
        """A parser can be emptied and rebuilt with unrelated transforms."""
        md = MarkdownParser()
        for name in md.list():
            md.unregister(name)
        md.register(name="wiki", pattern=r"\[\[(?<page>[^\]]+)\]\]", render=lambda c: f"<{c['page']}>")
        md.register(name="upper", pattern=r"[a-z]+", flags="u", render=lambda c: c[0].upper())

        assert md.parse("see [[home]] now") == "SEE <home> now"
