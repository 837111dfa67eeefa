"""Tests for the StyleCatalog and the Style model."""

from pathlib import Path

from lxml import etree

from python_docx_assembly.models.style import Style, StyleType
from python_docx_assembly.package import OOXMLPackage
from python_docx_assembly.styles import StyleCatalog

WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def catalog_from(styles: str) -> StyleCatalog:
    root = etree.fromstring(f'<w:styles xmlns:w="{WORD_NS}">{styles}</w:styles>')
    return StyleCatalog.from_xml(root)


class TestStyleCatalogLoad:
    """Test reading word/styles.xml."""

    def test_from_package_dir(self, sample_docx: Path) -> None:
        with OOXMLPackage.open(sample_docx) as pkg:
            catalog = StyleCatalog.from_package_dir(pkg.temp_dir)

        assert len(catalog) == 7
        assert catalog.styles[0].style_id == "Normal"
        assert catalog.get("Heading1").based_on == "Normal"

    def test_missing_styles_part(self, make_docx) -> None:
        """Test that a package without styles.xml yields an empty catalog."""
        with OOXMLPackage.open(make_docx(styles=None)) as pkg:
            catalog = StyleCatalog.from_package_dir(pkg.temp_dir)

        assert len(catalog) == 0
        assert catalog.default_styles == {}

    def test_style_without_id_skipped(self) -> None:
        catalog = catalog_from('<w:style w:type="paragraph"><w:name w:val="Orphan"/></w:style>')
        assert len(catalog) == 0

    def test_name_falls_back_to_id(self) -> None:
        catalog = catalog_from('<w:style w:type="paragraph" w:styleId="Plain"/>')
        assert catalog.styles[0].name == "Plain"

    def test_default_flag_variants(self) -> None:
        catalog = catalog_from(
            '<w:style w:type="paragraph" w:default="true" w:styleId="A"><w:name w:val="a"/></w:style>'
            '<w:style w:type="character" w:default="on" w:styleId="B"><w:name w:val="b"/></w:style>'
            '<w:style w:type="table" w:default="0" w:styleId="C"><w:name w:val="c"/></w:style>'
        )
        assert [style.is_default for style in catalog] == [True, True, False]


class TestStyleCatalogDefaults:
    """Test default style resolution."""

    def test_default_styles_map(self, sample_docx: Path) -> None:
        with OOXMLPackage.open(sample_docx) as pkg:
            catalog = StyleCatalog.from_package_dir(pkg.temp_dir)

        assert catalog.default_styles == {
            "paragraph": "Normal",
            "character": "Default Paragraph Font",
            "table": "Normal Table",
        }

    def test_second_default_is_demoted(self) -> None:
        """Test that at most one style per type stays flagged default."""
        catalog = catalog_from(
            '<w:style w:type="paragraph" w:default="1" w:styleId="First"><w:name w:val="first"/></w:style>'
            '<w:style w:type="paragraph" w:default="1" w:styleId="Second"><w:name w:val="second"/></w:style>'
        )

        assert catalog.default_style_for(StyleType.PARAGRAPH).style_id == "First"
        assert catalog.get("Second").is_default is False
        assert sum(style.is_default for style in catalog) == 1


class TestStyleCatalogLookup:
    """Test name lookups."""

    def test_lookup_by_name_and_type(self) -> None:
        catalog = catalog_from(
            '<w:style w:type="paragraph" w:styleId="Quote"><w:name w:val="Quote"/></w:style>'
            '<w:style w:type="character" w:styleId="QuoteChar"><w:name w:val="Quote"/></w:style>'
        )

        assert catalog.lookup("Quote", StyleType.PARAGRAPH).style_id == "Quote"
        assert catalog.lookup("Quote", "character").style_id == "QuoteChar"
        assert catalog.lookup("Quote", StyleType.TABLE) is None

    def test_names_by_type(self, sample_docx: Path) -> None:
        with OOXMLPackage.open(sample_docx) as pkg:
            catalog = StyleCatalog.from_package_dir(pkg.temp_dir)

        assert catalog.names(StyleType.PARAGRAPH) == ["Normal", "heading 1", "heading 2", "Title"]
        assert "Strong" in catalog.names()

    def test_similar_names(self, sample_docx: Path) -> None:
        with OOXMLPackage.open(sample_docx) as pkg:
            catalog = StyleCatalog.from_package_dir(pkg.temp_dir)

        suggestions = catalog.similar_names("heading 3", StyleType.PARAGRAPH)

        assert "heading 1" in suggestions
        assert "heading 2" in suggestions
        assert "Strong" not in suggestions

    def test_similar_names_nothing_close(self, sample_docx: Path) -> None:
        with OOXMLPackage.open(sample_docx) as pkg:
            catalog = StyleCatalog.from_package_dir(pkg.temp_dir)

        assert catalog.similar_names("zzzzzzzzzz", StyleType.PARAGRAPH) == []


class TestStyleModel:
    """Test the Style value object."""

    def test_to_dict(self) -> None:
        style = Style("Heading1", "heading 1", StyleType.PARAGRAPH, based_on="Normal")
        assert style.to_dict() == {
            "style_id": "Heading1",
            "style_name": "heading 1",
            "style_type": "paragraph",
            "is_default": False,
            "based_on": "Normal",
        }

    def test_repr(self) -> None:
        style = Style("Normal", "Normal", StyleType.PARAGRAPH, is_default=True)
        assert repr(style) == "<Style style_id='Normal' name='Normal' type=paragraph default>"
