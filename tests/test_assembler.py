import os
import re
import tempfile
from pathlib import Path
from unittest import TestCase, main

from bs4 import BeautifulSoup
from parameterized import parameterized

from epub_pdf.config import ConversionOptions
from epub_pdf.core.assembler import (
    PAGE_BREAK_MARKER,
    assemble_document,
    extract_body,
    normalize_image_sources,
)
from epub_pdf.core.package import build_package_model
from tests.epub_fixtures import chapter, write_package, write_sample_book

ASSET_SRC = re.compile(r"^assets/[^/]+$")


class TestExtractBody(TestCase):
    def test_body_contents_only(self):
        body = extract_body(chapter("<p>Hello</p>", title="Ignored"))
        self.assertIn("<p>Hello</p>", body)
        self.assertNotIn("Ignored", body)
        self.assertNotIn("<body", body)

    def test_no_body_element(self):
        self.assertEqual(extract_body(""), "")

    @parameterized.expand([
        ["relative", "../Images/a.png", "assets/a.png"],
        ["same_dir", "b.jpg", "assets/b.jpg"],
        ["absolute", "/usr/share/c.gif", "assets/c.gif"],
        ["url", "http://example.com/img/d.png", "assets/d.png"],
    ])
    def test_image_sources_rewritten(self, _name, src, expected):
        body = extract_body(chapter(f'<p><img src="{src}"/></p>'))
        img = BeautifulSoup(body, "lxml").find("img")
        self.assertEqual(img["src"], expected)


    @parameterized.expand([
        ["xlink", "xlink:href"],
        ["plain", "href"],
    ])
    def test_svg_image_references_rewritten(self, _name, attribute):
        body = extract_body(
            chapter(
                '<svg xmlns="http://www.w3.org/2000/svg"'
                ' xmlns:xlink="http://www.w3.org/1999/xlink">'
                f'<image width="600" height="800" {attribute}="../Images/cover.jpg"/>'
                "</svg>"
            )
        )
        image = BeautifulSoup(body, "lxml").find("image")
        self.assertEqual(image[attribute], "assets/cover.jpg")


class TestNormalizeImageSources(TestCase):
    def test_only_foreign_sources_change(self):
        html = (
            "<html><body>"
            '<img src="assets/kept.png"/>'
            '<img src="/abs/path/moved.png"/>'
            '<img src="../rel/other.jpg"/>'
            "<img/>"
            "</body></html>"
        )
        tree = BeautifulSoup(normalize_image_sources(html), "lxml")
        sources = [img.get("src") for img in tree.find_all("img")]
        self.assertEqual(
            sources, ["assets/kept.png", "assets/moved.png", "assets/other.jpg", None]
        )


class TestAssembleDocument(TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def body_of(self, document):
        return BeautifulSoup(document.html, "lxml").body

    def test_reading_order_and_page_breaks(self):
        model = build_package_model(write_sample_book(self.root))
        html = assemble_document(model).html

        self.assertEqual(html.count("Chapter one"), 1)
        self.assertEqual(html.count("Chapter two"), 1)
        self.assertNotIn("Notes text", html)
        self.assertEqual(html.count('class="page-break"'), 1)
        self.assertLess(html.index("Chapter one"), html.index('class="page-break"'))
        self.assertLess(html.index('class="page-break"'), html.index("Chapter two"))

    def test_no_page_break_before_first_document(self):
        model = build_package_model(write_sample_book(self.root))
        body = self.body_of(assemble_document(model))
        first = body.find(True)
        self.assertEqual(first.name, "p")
        self.assertEqual(first.get_text(), "Chapter one")

    def test_head_carries_title_and_style(self):
        model = build_package_model(write_sample_book(self.root))
        tree = BeautifulSoup(assemble_document(model).html, "lxml")

        self.assertEqual(tree.title.get_text(), "Test Book")
        self.assertEqual(tree.html["lang"], "en")
        style = tree.head.style.get_text()
        self.assertIn("url('assets/Serif.ttf')", style)
        self.assertIn("page-break-after: always", style)

    def test_title_is_escaped(self):
        write_package(
            self.root,
            items=[("c", "c.xhtml", "application/xhtml+xml")],
            spine=["c"],
            files={"c.xhtml": chapter("<p>c</p>")},
            metadata={"title": "Tom &amp; Jerry &lt;3"},
        )
        tree = BeautifulSoup(assemble_document(build_package_model(self.root)).html, "lxml")
        self.assertEqual(tree.title.get_text(), "Tom & Jerry <3")

    def test_all_image_sources_in_asset_namespace(self):
        write_package(
            self.root,
            items=[
                ("a", "Text/a.xhtml", "application/xhtml+xml"),
                ("b", "b.xhtml", "application/xhtml+xml"),
            ],
            spine=["a", "b"],
            files={
                "Text/a.xhtml": chapter(
                    '<img src="../Images/one.png"/><div><img src="/root/two.jpg"/></div>'
                ),
                "b.xhtml": chapter('<figure><img src="three.svg"/></figure>'),
            },
        )
        document = assemble_document(build_package_model(self.root))
        sources = [img["src"] for img in self.body_of(document).find_all("img")]

        self.assertEqual(sources, ["assets/one.png", "assets/two.jpg", "assets/three.svg"])
        for src in sources:
            self.assertRegex(src, ASSET_SRC)

    def test_unreadable_spine_document_is_skipped(self):
        write_package(
            self.root,
            items=[
                ("a", "a.xhtml", "application/xhtml+xml"),
                ("gone", "gone.xhtml", "application/xhtml+xml"),
                ("b", "b.xhtml", "application/xhtml+xml"),
            ],
            spine=["a", "gone", "b"],
            files={"a.xhtml": chapter("<p>A</p>"), "b.xhtml": chapter("<p>B</p>")},
        )
        html = assemble_document(build_package_model(self.root)).html
        self.assertEqual(html.count('class="page-break"'), 1)
        self.assertLess(html.index("<p>A</p>"), html.index("<p>B</p>"))

    def test_empty_spine(self):
        write_package(self.root, items=[], spine=[])
        document = assemble_document(build_package_model(self.root))
        self.assertEqual(self.body_of(document).get_text(strip=True), "")
        self.assertNotIn('class="page-break"', document.html)

    def test_idempotent(self):
        model = build_package_model(write_sample_book(self.root))
        options = ConversionOptions(margin=0.75, custom_css="p { color: red; }")
        first = assemble_document(model, options)
        second = assemble_document(model, options)
        self.assertEqual(first.html, second.html)
        self.assertEqual(first.required_assets, second.required_assets)

    def test_options_override_model_style(self):
        model = build_package_model(write_sample_book(self.root))
        document = assemble_document(model, ConversionOptions(margin=2))
        self.assertIn("margin: 2in;", document.html)
        self.assertNotIn("margin: 0.5in;", document.html)

    def test_required_assets(self):
        model = build_package_model(write_sample_book(self.root))
        assets = assemble_document(model).required_assets
        oebps = os.path.join(str(self.root), "OEBPS")

        self.assertEqual(
            [(a.source_path, a.destination_name) for a in assets],
            [
                (os.path.join(oebps, "Fonts", "Serif.ttf"), "Serif.ttf"),
                (os.path.join(oebps, "Images", "cover.jpg"), "cover.jpg"),
            ],
        )

    def test_basename_collision_is_kept(self):
        write_package(
            self.root,
            items=[
                ("i1", "a/pic.png", "image/png"),
                ("i2", "b/pic.png", "image/png"),
            ],
            spine=[],
        )
        with self.assertLogs("epub_pdf.core.assembler", level="WARNING"):
            assets = assemble_document(build_package_model(self.root)).required_assets
        self.assertEqual([a.destination_name for a in assets], ["pic.png", "pic.png"])

    def test_page_break_marker(self):
        self.assertEqual(PAGE_BREAK_MARKER, '<div class="page-break"></div>')


if __name__ == "__main__":
    main()
