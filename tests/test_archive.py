import io
import tempfile
import zipfile
from pathlib import Path
from unittest import TestCase, main

from parameterized import parameterized

from epub_pdf.core.archive import extract_epub
from epub_pdf.errors import MalformedPackage
from tests.epub_fixtures import write_sample_book, zip_tree


class TestExtractEpub(TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.epub_bytes = zip_tree(write_sample_book(self.tmp / "src"))
        self.epub_path = self.tmp / "book.epub"
        self.epub_path.write_bytes(self.epub_bytes)

    def tearDown(self):
        self._tmp.cleanup()

    @parameterized.expand([["path"], ["str"], ["bytes"], ["stream"]])
    def test_sources(self, kind):
        source = {
            "path": self.epub_path,
            "str": str(self.epub_path),
            "bytes": self.epub_bytes,
            "stream": io.BytesIO(self.epub_bytes),
        }[kind]
        out = extract_epub(source, self.tmp / "out")
        self.assertTrue((out / "META-INF" / "container.xml").is_file())
        self.assertTrue((out / "OEBPS" / "Text" / "ch1.xhtml").is_file())

    def test_not_a_zip(self):
        with self.assertRaises(MalformedPackage):
            extract_epub(b"plain text, not an archive", self.tmp / "out")

    @parameterized.expand([
        ["parent", "../evil.txt"],
        ["nested_parent", "OEBPS/../../evil.txt"],
        ["absolute", "/tmp/evil.txt"],
    ])
    def test_member_escaping_root(self, _name, member):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("mimetype", "application/epub+zip")
            archive.writestr(member, "payload")

        with self.assertRaises(MalformedPackage) as context:
            extract_epub(buffer.getvalue(), self.tmp / "out")
        self.assertIn(member, str(context.exception))
        self.assertEqual(list((self.tmp / "out").iterdir()), [])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            extract_epub(self.tmp / "nope.epub", self.tmp / "out")


if __name__ == "__main__":
    main()
