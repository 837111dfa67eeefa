"""Tests for DocumentPart, cursors and node handles."""

from pathlib import Path

import pytest

from python_docx_assembly.constants import w
from python_docx_assembly.errors import CursorUnresolvedError, PartNotFoundError, StaleNodeError
from python_docx_assembly.package import OOXMLPackage
from python_docx_assembly.parts import DocumentPart, PartKind


@pytest.fixture
def package(sample_docx: Path) -> OOXMLPackage:
    pkg = OOXMLPackage.open(sample_docx)
    yield pkg
    pkg.close()


class TestDocumentPartLoad:
    def test_body_part(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)

        assert body.kind is PartKind.BODY
        assert body.part_name == "word/document.xml"
        assert body.cursor == "/w:document/w:body/*[1]"
        assert body.content_root.tag == w("body")

    def test_header_part(self, package: OOXMLPackage) -> None:
        header = DocumentPart.header(package.temp_dir, "header1.xml")

        assert header.body_xpath == "/w:hdr"
        assert header.node_at_cursor().tag == w("p")

    def test_missing_part(self, package: OOXMLPackage) -> None:
        with pytest.raises(PartNotFoundError) as exc_info:
            DocumentPart.header(package.temp_dir, "header9.xml")

        assert exc_info.value.part_name == "word/header9.xml"

    def test_footnotes_cursor_starts_at_last_child(self, make_docx) -> None:
        docx = make_docx(
            footnotes=(
                '<w:footnote w:type="separator" w:id="-1"><w:p/></w:footnote>'
                '<w:footnote w:id="1"><w:p><w:r><w:t>Note</w:t></w:r></w:p></w:footnote>'
            )
        )
        with OOXMLPackage.open(docx) as pkg:
            footnotes = DocumentPart.footnotes(pkg.temp_dir)
            assert footnotes.node_at_cursor().get(w("id")) == "1"


class TestDocumentPartCursor:
    def test_set_cursor_is_lazy(self, package: OOXMLPackage) -> None:
        """Test that an unresolvable cursor only fails when it is read."""
        body = DocumentPart.body(package.temp_dir)
        body.set_cursor("/w:document/w:body/w:tbl")

        with pytest.raises(CursorUnresolvedError) as exc_info:
            body.node_at_cursor()

        assert exc_info.value.cursor == "/w:document/w:body/w:tbl"

    def test_unset_cursor(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)
        body.set_cursor(None)

        with pytest.raises(CursorUnresolvedError):
            body.node_at_cursor()

    def test_non_node_expression(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)
        body.set_cursor("count(//w:p)")

        with pytest.raises(CursorUnresolvedError):
            body.node_at_cursor()

    def test_cursor_end_and_begin(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)

        body.cursor_end()
        assert body.node_at_cursor().tag == w("sectPr")

        body.cursor_begin()
        assert body.node_at_cursor() is body.content_root[0]

    def test_cursor_to(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)
        third = body.xpath("/w:document/w:body/w:p")[2]

        body.cursor_to(third)

        assert body.node_at_cursor() is third

    def test_cursor_to_uses_positional_steps(self, package: OOXMLPackage) -> None:
        """Test that stored cursors carry no namespace prefix."""
        body = DocumentPart.body(package.temp_dir)
        body.cursor_to(body.content_root[-1])

        assert body.cursor == "/*/*[1]/*[5]"
        assert body.node_at_cursor().tag == w("sectPr")

    def test_xpath_variables(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)
        found = body.xpath("//w:bookmarkStart[@w:name = $name]", name="it's \"quoted\"")
        assert found == []


class TestNodeHandle:
    def test_handle_valid_until_mutation(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)
        handle = body.handle_at_cursor()

        assert handle.is_valid
        assert handle.element.tag == w("p")

        body.mark_mutated()

        assert not handle.is_valid
        with pytest.raises(StaleNodeError):
            handle.element

    def test_new_handle_after_mutation(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)
        body.mark_mutated()

        assert body.handle_at_cursor().is_valid


class TestDocumentPartSave:
    def test_save_writes_tree(self, package: OOXMLPackage) -> None:
        body = DocumentPart.body(package.temp_dir)
        body.content_root[0].set(w("rsidR"), "00AB12CD")
        body.save()

        reloaded = DocumentPart.body(package.temp_dir)
        assert reloaded.content_root[0].get(w("rsidR")) == "00AB12CD"
        assert body.path.read_bytes().startswith(b"<?xml version='1.0' encoding='UTF-8' standalone='yes'?>")
