from pathlib import Path
from textwrap import dedent, indent
from typing import Any, Dict, Iterable, List, Optional

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


def intellisense_xml(assembly: str, members: Dict[str, str]) -> str:
    """Builds an IntelliSense file; ``members`` maps DocIds to inner xml."""
    lines = [
        XML_DECLARATION,
        "<doc>",
        "  <assembly>",
        f"    <name>{assembly}</name>",
        "  </assembly>",
        "  <members>",
    ]
    for doc_id, body in members.items():
        lines.append(f'    <member name="{doc_id}">')
        lines.append(indent(dedent(body).strip(), "      "))
        lines.append("    </member>")
    lines += ["  </members>", "</doc>", ""]
    return "\n".join(lines)


def docs_member_xml(
    name: str,
    doc_id: str,
    docs: str,
    member_type: str = "Method",
    implements: Iterable[str] = (),
) -> str:
    lines = [
        f'<Member MemberName="{name}">',
        f'  <MemberSignature Language="DocId" Value="{doc_id}"/>',
        f"  <MemberType>{member_type}</MemberType>",
    ]
    implemented = list(implements)
    if implemented:
        lines.append("  <Implements>")
        for interface_member in implemented:
            lines.append(f"    <InterfaceMember>{interface_member}</InterfaceMember>")
        lines.append("  </Implements>")
    lines += [
        "  <Docs>",
        indent(dedent(docs).strip(), "    "),
        "  </Docs>",
        "</Member>",
    ]
    return "\n".join(lines)


def docs_type_xml(
    full_name: str,
    assembly: str,
    docs: str,
    members: Iterable[str] = (),
    doc_id: Optional[str] = None,
) -> str:
    """Builds a Docs type file; ``members`` come from ``docs_member_xml``."""
    name = full_name.rsplit(".", 1)[-1]
    doc_id = doc_id or f"T:{full_name}"
    lines = [
        f'<Type Name="{name}" FullName="{full_name}">',
        f'  <TypeSignature Language="DocId" Value="{doc_id}"/>',
        "  <AssemblyInfo>",
        f"    <AssemblyName>{assembly}</AssemblyName>",
        "  </AssemblyInfo>",
        "  <Docs>",
        indent(dedent(docs).strip(), "    "),
        "  </Docs>",
        "  <Members>",
    ]
    for member in members:
        lines.append(indent(member, "    "))
    lines += ["  </Members>", "</Type>", ""]
    return "\n".join(lines)


class CorpusFactory:
    """Lays out a project with a Docs folder, an IntelliSense folder and config."""

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files_to_create: List[Dict[str, Any]] = []
        self._pyproject_data: Dict[str, Any] = {}

    def with_config(self, docport_config: Dict[str, Any]) -> "CorpusFactory":
        tool = self._pyproject_data.setdefault("tool", {})
        tool["docport"] = docport_config
        return self

    def with_source(self, path: str, content: str) -> "CorpusFactory":
        self._files_to_create.append({"path": path, "content": content})
        return self

    def with_intellisense(
        self, path: str, assembly: str, members: Dict[str, str]
    ) -> "CorpusFactory":
        return self.with_source(path, intellisense_xml(assembly, members))

    def with_docs_type(
        self,
        path: str,
        full_name: str,
        assembly: str,
        docs: str,
        members: Iterable[str] = (),
    ) -> "CorpusFactory":
        content = docs_type_xml(full_name, assembly, docs, members)
        return self.with_source(path, content)

    def build(self) -> Path:
        if self._pyproject_data:
            # Only corpora with a config need the "test" extra.
            import tomli_w

            with (self.root_path / "pyproject.toml").open("wb") as f:
                tomli_w.dump(self._pyproject_data, f)

        for file_spec in self._files_to_create:
            output_path = self.root_path / file_spec["path"]
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(file_spec["content"], encoding="utf-8")

        return self.root_path
