"""Shared fixtures: small .docx packages written with zipfile."""

import zipfile
from pathlib import Path

import pytest

WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
WP_NS = "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
REL_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
CT_BASE = "application/vnd.openxmlformats-officedocument.wordprocessingml"


def drawing(doc_pr_id: int, name: str = "Picture") -> str:
    """A run holding an inline drawing whose wp:docPr carries an id."""
    return (
        f'<w:r><w:drawing><wp:inline xmlns:wp="{WP_NS}">'
        f'<wp:docPr id="{doc_pr_id}" name="{name} {doc_pr_id}"/>'
        f"</wp:inline></w:drawing></w:r>"
    )


SAMPLE_BODY = f"""
<w:p>
  <w:pPr><w:pStyle w:val="Heading1"/></w:pPr>
  <w:bookmarkStart w:id="0" w:name="intro"/>
  <w:r><w:t>Introduction</w:t></w:r>
  <w:bookmarkEnd w:id="0"/>
  <w:bookmarkStart w:id="1" w:name="_GoBack"/><w:bookmarkEnd w:id="1"/>
</w:p>
<w:p>
  <w:pPr><w:pStyle w:val="Normal"/></w:pPr>
  <w:r><w:t>First paragraph</w:t></w:r>
  {drawing(99)}
</w:p>
<w:p>
  <w:pPr>
    <w:pStyle w:val="Heading1"/>
    <w:sectPr>
      <w:pgSz w:w="15840" w:h="12240" w:orient="landscape"/>
      <w:pgMar w:top="720" w:right="720" w:bottom="720" w:left="720" w:header="360" w:footer="360"/>
    </w:sectPr>
  </w:pPr>
  <w:r><w:t>Details</w:t></w:r>
</w:p>
<w:p>
  <w:bookmarkStart w:id="2" w:name="details"/>
  <w:r><w:t>Second section</w:t></w:r>
  <w:bookmarkEnd w:id="2"/>
</w:p>
<w:sectPr>
  <w:headerReference w:type="default" r:id="rId2"/>
  <w:pgSz w:w="12240" w:h="15840"/>
  <w:pgMar w:top="1440" w:right="1440" w:bottom="1440" w:left="1440" w:header="720" w:footer="720"/>
  <w:cols w:space="720"/>
</w:sectPr>
"""

SAMPLE_STYLES = """
<w:style w:type="paragraph" w:default="1" w:styleId="Normal"><w:name w:val="Normal"/></w:style>
<w:style w:type="paragraph" w:styleId="Heading1"><w:name w:val="heading 1"/><w:basedOn w:val="Normal"/></w:style>
<w:style w:type="paragraph" w:styleId="Heading2"><w:name w:val="heading 2"/><w:basedOn w:val="Normal"/></w:style>
<w:style w:type="paragraph" w:styleId="Title"><w:name w:val="Title"/></w:style>
<w:style w:type="character" w:default="1" w:styleId="DefaultParagraphFont"><w:name w:val="Default Paragraph Font"/></w:style>
<w:style w:type="character" w:styleId="Strong"><w:name w:val="Strong"/></w:style>
<w:style w:type="table" w:default="1" w:styleId="TableNormal"><w:name w:val="Normal Table"/></w:style>
"""

SAMPLE_CORE = """
<dc:title>Original title</dc:title>
<dc:creator>Original Author</dc:creator>
<cp:lastModifiedBy>Someone</cp:lastModifiedBy>
<dcterms:created xsi:type="dcterms:W3CDTF">2019-03-04T05:06:07Z</dcterms:created>
<dcterms:modified xsi:type="dcterms:W3CDTF">2019-03-04T05:06:07Z</dcterms:modified>
"""


def header_xml(content: str, root: str = "hdr") -> str:
    return f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n<w:{root} xmlns:w="{WORD_NS}">{content}</w:{root}>'


def build_docx(
    path: Path,
    body: str = SAMPLE_BODY,
    styles: str | None = SAMPLE_STYLES,
    headers: dict[str, str] | None = None,
    footers: dict[str, str] | None = None,
    footnotes: str | None = None,
    core: str | None = SAMPLE_CORE,
) -> Path:
    """Write a .docx package.

    Args:
        path: Output file
        body: Children of w:body
        styles: Children of w:styles, or None for no styles part
        headers: header file name -> children of w:hdr
        footers: footer file name -> children of w:ftr
        footnotes: Children of w:footnotes, or None for no footnotes part
        core: Children of cp:coreProperties, or None for no core part
    """
    headers = headers or {}
    footers = footers or {}

    overrides = [("/word/document.xml", f"{CT_BASE}.document.main+xml")]
    root_rels = [("rId1", f"{REL_BASE}/officeDocument", "word/document.xml")]
    doc_rels: list[tuple[str, str, str]] = []

    def add_doc_rel(rel_type: str, target: str) -> None:
        doc_rels.append((f"rId{len(doc_rels) + 1}", f"{REL_BASE}/{rel_type}", target))

    files: dict[str, str] = {
        "word/document.xml": (
            f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
            f'<w:document xmlns:w="{WORD_NS}" xmlns:r="{R_NS}"><w:body>{body}</w:body></w:document>'
        )
    }

    if styles is not None:
        files["word/styles.xml"] = (
            f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
            f'<w:styles xmlns:w="{WORD_NS}">{styles}</w:styles>'
        )
        overrides.append(("/word/styles.xml", f"{CT_BASE}.styles+xml"))
        add_doc_rel("styles", "styles.xml")

    for name, content in headers.items():
        files[f"word/{name}"] = header_xml(content, "hdr")
        overrides.append((f"/word/{name}", f"{CT_BASE}.header+xml"))
        add_doc_rel("header", name)

    for name, content in footers.items():
        files[f"word/{name}"] = header_xml(content, "ftr")
        overrides.append((f"/word/{name}", f"{CT_BASE}.footer+xml"))
        add_doc_rel("footer", name)

    if footnotes is not None:
        files["word/footnotes.xml"] = header_xml(footnotes, "footnotes")
        overrides.append(("/word/footnotes.xml", f"{CT_BASE}.footnotes+xml"))
        add_doc_rel("footnotes", "footnotes.xml")

    if core is not None:
        files["docProps/core.xml"] = (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
            '<cp:coreProperties '
            'xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties" '
            'xmlns:dc="http://purl.org/dc/elements/1.1/" '
            'xmlns:dcterms="http://purl.org/dc/terms/" '
            'xmlns:dcmitype="http://purl.org/dc/dcmitype/" '
            'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
            f"{core}</cp:coreProperties>"
        )
        overrides.append(
            ("/docProps/core.xml", "application/vnd.openxmlformats-package.core-properties+xml")
        )
        root_rels.append(
            (
                "rId2",
                "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties",
                "docProps/core.xml",
            )
        )

    override_xml = "".join(
        f'<Override PartName="{name}" ContentType="{ctype}"/>' for name, ctype in overrides
    )
    files["[Content_Types].xml"] = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
        '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
        '<Default Extension="xml" ContentType="application/xml"/>'
        f"{override_xml}</Types>"
    )

    def rels_xml(rels: list[tuple[str, str, str]]) -> str:
        entries = "".join(
            f'<Relationship Id="{rel_id}" Type="{rel_type}" Target="{target}"/>'
            for rel_id, rel_type, target in rels
        )
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
            '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
            f"{entries}</Relationships>"
        )

    files["_rels/.rels"] = rels_xml(root_rels)
    files["word/_rels/document.xml.rels"] = rels_xml(doc_rels)

    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return path


def read_part(docx_path: Path, part_name: str) -> bytes:
    with zipfile.ZipFile(docx_path) as zf:
        return zf.read(part_name)


@pytest.fixture
def sample_docx(tmp_path: Path) -> Path:
    """A document with headings, bookmarks, two sections, one header and one footer."""
    return build_docx(
        tmp_path / "sample.docx",
        headers={"header1.xml": f"<w:p>{drawing(5)}</w:p>"},
        footers={"footer1.xml": f"<w:p>{drawing(7)}</w:p>"},
    )


@pytest.fixture
def make_docx(tmp_path: Path):
    """Factory writing a .docx into tmp_path; keyword arguments go to build_docx."""

    def _make(name: str = "custom.docx", **kwargs) -> Path:
        return build_docx(tmp_path / name, **kwargs)

    return _make
