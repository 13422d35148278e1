from pathlib import Path

from docport.app.services import SignatureNormalizer
from docport.io import DocsLoader, DocsWriter
from docport.spec import ApiKind, ExceptionDoc
from docport.test_utils import docs_member_xml, docs_type_xml

TYPE_XML = docs_type_xml(
    "Foo.Bar",
    "MyAssembly",
    """
    <summary>To be added.</summary>
    <remarks>To be added.</remarks>
    """,
    [
        docs_member_xml(
            "Run",
            "M:Foo.Bar.Run(System.Int32)",
            """
            <param name="count">To be added.</param>
            <summary>To be added.</summary>
            <returns>To be added.</returns>
            <remarks>
              <format type="text/markdown"><![CDATA[

            ## Remarks

            Curated.

              ]]></format>
            </remarks>
            """,
        ),
        docs_member_xml(
            "System.IDisposable.Dispose",
            "M:Foo.Bar.System#IDisposable#Dispose",
            "<summary>Frees it.</summary>",
            implements=["M:System.IDisposable.Dispose"],
        ),
    ],
)


def _load(tmp_path: Path):
    (tmp_path / "Foo").mkdir()
    (tmp_path / "Foo" / "Bar.xml").write_text(TYPE_XML, encoding="utf-8")
    (tmp_path / "ns-Foo.xml").write_text('<Namespace Name="Foo" />')
    return DocsLoader(SignatureNormalizer()).load([tmp_path])


def test_loads_type_and_members(tmp_path: Path):
    corpus = _load(tmp_path)

    assert len(corpus.documents) == 1
    bar = corpus.types[0]
    assert bar.kind == ApiKind.TYPE
    assert bar.doc_id == "T:Foo.Bar"
    assert bar.node.namespace == "Foo"
    assert bar.node.assembly == "MyAssembly"
    assert bar.summary == "To be added."

    run, dispose = bar.members
    assert run.node.member_type == "Method"
    assert run.node.type_doc_id == "T:Foo.Bar"
    assert run.remarks == "Curated."
    assert run.docs.params == {"count": "To be added."}
    assert run.docs.value is None
    assert dispose.node.interface_members == ("M:System.IDisposable.Dispose",)
    assert dispose.node.is_explicit_implementation
    assert dispose.docs.remarks is None
    assert corpus.document_for(bar).path == tmp_path / "Foo" / "Bar.xml"


def test_untouched_document_round_trips(tmp_path: Path):
    corpus = _load(tmp_path)

    rendered = DocsWriter().render(corpus.documents[0])

    assert rendered == TYPE_XML


def test_writer_projects_only_changed_fields(tmp_path: Path):
    corpus = _load(tmp_path)
    document = corpus.documents[0]
    bar = document.entry
    run = bar.members[0]

    run.docs.summary = 'Runs <see cref="T:Foo.Bar"/>.'
    run.docs.params["count"] = "How many."
    run.docs.exceptions.append(
        ExceptionDoc("T:System.ArgumentException", "Negative count.")
    )
    bar.docs.remarks = "Type remarks."
    run.docs.changed = bar.docs.changed = True

    rendered = DocsWriter().render(document)

    assert '<summary>Runs <see cref="T:Foo.Bar"/>.</summary>' in rendered
    assert '<param name="count">How many.</param>' in rendered
    assert "## Remarks\n\nType remarks." in rendered
    assert "Curated." in rendered
    # New exceptions go after the remarks, indented like their siblings.
    assert (
        "</remarks>\n"
        '        <exception cref="T:System.ArgumentException">Negative count.</exception>\n'
        "      </Docs>"
    ) in rendered

    (tmp_path / "Foo" / "Bar.xml").write_text(rendered, encoding="utf-8")
    reloaded = DocsLoader(SignatureNormalizer()).load([tmp_path]).types[0]
    assert reloaded.remarks == "Type remarks."
    assert reloaded.members[0].docs.summary == 'Runs <see cref="T:Foo.Bar"/>.'
    assert reloaded.members[0].docs.exceptions == [
        ExceptionDoc("T:System.ArgumentException", "Negative count.")
    ]


def test_unchanged_entries_are_not_projected(tmp_path: Path):
    corpus = _load(tmp_path)
    document = corpus.documents[0]
    document.entry.docs.summary = "Not marked as changed."

    rendered = DocsWriter().render(document)

    assert "Not marked as changed." not in rendered


SPACED_XML = """<?xml version="1.0" encoding="utf-8"?>
<Type Name="Bar" FullName="Foo.Bar">
  <TypeSignature Language="DocId" Value="T:Foo.Bar" />
  <AssemblyInfo>
    <AssemblyName>MyAssembly</AssemblyName>
  </AssemblyInfo>
  <Docs>
    <summary>To be added.</summary>
    <remarks>Uses <see cref="T:Foo.Baz" />.</remarks>
  </Docs>
  <Members>
    <Member MemberName="Run">
      <MemberSignature Language="DocId" Value="M:Foo.Bar.Run" />
      <MemberType>Method</MemberType>
      <Parameters />
      <Docs>
        <summary>Runs.</summary>
      </Docs>
    </Member>
  </Members>
</Type>
"""


def test_changed_document_keeps_spaced_empty_tags(tmp_path: Path):
    path = tmp_path / "Bar.xml"
    path.write_text(SPACED_XML, encoding="utf-8")
    document = DocsLoader(SignatureNormalizer()).load_file(path)
    bar = document.entry

    bar.docs.summary = 'Bar of <see cref="T:Foo.Baz"/>.'
    bar.docs.changed = True
    rendered = DocsWriter().render(document)

    assert rendered == SPACED_XML.replace(
        "<summary>To be added.</summary>",
        '<summary>Bar of <see cref="T:Foo.Baz" />.</summary>',
    )


def test_member_without_docs_has_no_doc_fields(tmp_path: Path):
    path = tmp_path / "Bar.xml"
    path.write_text(
        '<Type Name="Bar" FullName="Foo.Bar">\n'
        '  <TypeSignature Language="DocId" Value="T:Foo.Bar"/>\n'
        "  <Docs><summary>Bar.</summary></Docs>\n"
        "  <Members>\n"
        '    <Member MemberName="Run">\n'
        '      <MemberSignature Language="DocId" Value="M:Foo.Bar.Run"/>\n'
        "    </Member>\n"
        "  </Members>\n"
        "</Type>\n",
        encoding="utf-8",
    )

    document = DocsLoader(SignatureNormalizer()).load_file(path)

    assert document.entry.docs.present
    assert not document.entry.members[0].docs.present
