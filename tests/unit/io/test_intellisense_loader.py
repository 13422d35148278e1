from pathlib import Path

from docport.app.services import SignatureNormalizer
from docport.io import IntelliSenseLoader
from docport.needle import L
from docport.spec import ApiKind
from docport.test_utils import SpyBus, intellisense_xml, make_config


def _loader(**config) -> IntelliSenseLoader:
    return IntelliSenseLoader(make_config(**config), SignatureNormalizer())


def test_loads_members_with_all_fields(tmp_path: Path):
    (tmp_path / "MyAssembly.xml").write_text(
        intellisense_xml(
            "MyAssembly",
            {
                "T:Foo.Bar`1": """
                    <summary>A bar.</summary>
                    <typeparam name="T">The item.</typeparam>
                    <remarks>
                      <para>One.</para>
                      <para>Two.</para>
                    </remarks>
                """,
                "M:Foo.Bar`1.Run(System.Int32)": """
                    <summary>
                      Runs the
                      bar.
                    </summary>
                    <param name="count">How many.</param>
                    <returns>A <see cref="T:System.Boolean" />.</returns>
                    <exception cref="T:System.ArgumentException">
                      <paramref name="count" /> is negative.
                    </exception>
                """,
            },
        )
    )

    entries = _loader().load([tmp_path])

    assert [e.doc_id for e in entries] == [
        "T:Foo.Bar`1",
        "M:Foo.Bar`1.Run(System.Int32)",
    ]
    bar, run = entries
    assert bar.kind == ApiKind.TYPE
    assert bar.node.assembly == "MyAssembly"
    assert bar.docs.typeparams == {"T": "The item."}
    assert "<para>One.</para>" in bar.docs.remarks
    assert bar.docs.returns is None

    assert run.kind == ApiKind.MEMBER
    assert run.docs.summary == "Runs the bar."
    assert run.docs.params == {"count": "How many."}
    assert run.docs.returns == 'A <see cref="T:System.Boolean"/>.'
    assert run.docs.exceptions[0].cref == "T:System.ArgumentException"
    assert run.docs.exceptions[0].text == '<paramref name="count"/> is negative.'
    assert run.node.source_path == str(tmp_path / "MyAssembly.xml")


def test_excluded_assemblies_are_skipped(tmp_path: Path):
    (tmp_path / "Other.xml").write_text(
        intellisense_xml("Other", {"T:Other.Thing": "<summary>x</summary>"})
    )

    assert _loader().load([tmp_path]) == []


def test_broken_files_are_reported_and_skipped(tmp_path: Path, monkeypatch):
    spy_bus = SpyBus()
    (tmp_path / "a_broken.xml").write_text("<doc><members>")
    (tmp_path / "b_good.xml").write_text(
        intellisense_xml("MyAssembly", {"T:Foo.Bar": "<summary>x</summary>"})
    )

    with spy_bus.patch(monkeypatch):
        entries = _loader().load([tmp_path])

    assert [e.doc_id for e in entries] == ["T:Foo.Bar"]
    spy_bus.assert_id_called(L.load.unreadable, level="error")


def test_non_documentation_files_are_ignored(tmp_path: Path):
    (tmp_path / "project.xml").write_text("<Project />")

    assert _loader().load([tmp_path]) == []
