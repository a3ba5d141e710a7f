"""Integration tests for the public API."""

import logging
from io import BytesIO

import pytest

from mdproof import LayoutConfig, LayoutPipeline, MdproofError, StructureError, layout_markdown, markdown_to_pdf, render_file
from mdproof.engine.events import BlockTag, EndBlock
from mdproof.engine.section import CodeBlock, ListItem, Plain
from mdproof.engine.span import ImageSpan, TextSpan

DOCUMENT = """# Title

Some *emphasised* and **strong** text with `code`.

- first item
- second item
  - nested item

> A quote

```
line one

line three
```

***

![picture](picture.png)
"""


@pytest.mark.integration
class TestLayoutMarkdown:
    def test_document_structure(self, sample_image):
        config = LayoutConfig(resources_directory=sample_image.parent)

        result = layout_markdown(DOCUMENT, config)

        kinds = [type(section) for section in result.sections]
        assert Plain in kinds
        assert ListItem in kinds
        code = next(s for s in result.sections if isinstance(s, CodeBlock))
        assert len(code.lines) == 3
        assert result.page_count == 1
        assert result.missing_resources == []

    def test_image_is_placed(self, sample_image):
        result = layout_markdown(DOCUMENT, LayoutConfig(resources_directory=sample_image.parent))

        images = [p.span for page in result.pages for p in page if isinstance(p.span, ImageSpan)]
        assert len(images) == 1
        assert (images[0].width, images[0].height) == pytest.approx((144.0, 72.0))

    def test_missing_image_is_reported(self, temp_dir):
        result = layout_markdown("![x](gone.png)", LayoutConfig(resources_directory=temp_dir))

        assert result.missing_resources == ["gone.png"]
        assert result.page_count == 1

    def test_missing_image_warns_once(self, temp_dir, caplog):
        with caplog.at_level(logging.DEBUG, logger="mdproof"):
            layout_markdown("![x](gone.png)", LayoutConfig(resources_directory=temp_dir))

        warnings = [record for record in caplog.records if record.levelno >= logging.WARNING]
        assert len(warnings) == 1
        assert "gone.png" in warnings[0].getMessage()

    def test_long_document_spans_pages(self):
        markdown = "\n\n".join(f"Paragraph {index} " + "word " * 40 for index in range(60))

        result = layout_markdown(markdown)

        assert result.page_count > 1
        config = LayoutConfig()
        for page in result.pages:
            for placed in page:
                assert placed.y >= config.content_bottom - 1e-6

    def test_empty_document(self):
        result = layout_markdown("")

        assert result.page_count == 1
        assert result.sections == []

    def test_page_break(self):
        result = layout_markdown("one\n\n<!-- pagebreak -->\n\ntwo")

        assert result.page_count == 2
        texts = [[p.span.text for p in page if isinstance(p.span, TextSpan)] for page in result.pages]
        assert texts == [["one"], ["two"]]

    def test_malformed_event_stream(self):
        pipeline = LayoutPipeline()

        with pytest.raises(StructureError):
            pipeline.sections([EndBlock(BlockTag.BLOCK_QUOTE)])


@pytest.mark.integration
class TestPdfOutput:
    def test_markdown_to_pdf_buffer(self):
        buffer = BytesIO()

        result = markdown_to_pdf("# Hello\n\nWorld", buffer)

        assert buffer.getvalue().startswith(b"%PDF")
        assert result.page_count == 1

    def test_render_file_resolves_images_next_to_source(self, sample_image):
        source = sample_image.parent / "doc.md"
        source.write_text(DOCUMENT, encoding="utf-8")
        output = sample_image.parent / "doc.pdf"

        result = render_file(source, output)

        assert result.missing_resources == []
        assert output.read_bytes().startswith(b"%PDF")

    def test_render_file_missing_input(self, temp_dir):
        with pytest.raises(MdproofError):
            render_file(temp_dir / "absent.md", temp_dir / "out.pdf")
