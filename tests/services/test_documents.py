"""Tests for DocumentService — catalog, overrides, show, export."""

from __future__ import annotations

from pathlib import Path

from rulekit.infrastructure.workspace import Workspace
from rulekit.services.documents import DocumentService

PACKAGED = [
    "api-service-requirements",
    "database-documentation",
    "security-guidelines",
    "web-app-ui-ux",
]


def _override(workspace: Workspace, filename: str, content: str) -> Path:
    workspace.override_dir.mkdir(parents=True, exist_ok=True)
    path = workspace.override_dir / filename
    path.write_text(content, encoding="utf-8")
    return path


class TestCatalog:
    def test_packaged_documents(self, workspace: Workspace) -> None:
        docs = DocumentService(workspace).catalog()
        assert [d.name for d in docs] == PACKAGED
        assert all(d.source == "package" for d in docs)
        kinds = {d.name: d.kind for d in docs}
        assert kinds["database-documentation"] == "template"
        assert kinds["security-guidelines"] == "guideline"

    def test_override_shadows_packaged_copy(self, workspace: Workspace) -> None:
        _override(
            workspace,
            "security-guidelines.md",
            "---\nkind: guideline\n---\n# Our Security Rules\n\nLocal.\n",
        )
        doc = DocumentService(workspace).get("security-guidelines")
        assert doc is not None
        assert doc.source == "override"
        assert doc.title == "Our Security Rules"
        assert "Local." in doc.body

    def test_override_adds_new_document(self, workspace: Workspace) -> None:
        _override(workspace, "team-rules.md", "# Team Rules\n")
        names = [d.name for d in DocumentService(workspace).catalog()]
        assert "team-rules" in names
        assert names == sorted(names)

    def test_invalid_override_is_skipped_with_warning(self, workspace: Workspace) -> None:
        _override(workspace, "broken.md", "---\nkind: poem\n---\n# Broken\n")
        warnings: list[str] = []
        names = [d.name for d in DocumentService(workspace).catalog(warnings)]
        assert "broken" not in names
        assert any("broken.md" in w for w in warnings)


class TestListDocuments:
    def test_all(self, workspace: Workspace) -> None:
        result = DocumentService(workspace).list_documents()
        assert result.ok
        assert result.data["count"] == 4
        assert "body" not in result.data["items"][0]

    def test_filter_by_kind(self, workspace: Workspace) -> None:
        result = DocumentService(workspace).list_documents(kind="template")
        assert [i["name"] for i in result.data["items"]] == ["database-documentation"]


class TestShow:
    def test_returns_body(self, workspace: Workspace) -> None:
        result = DocumentService(workspace).show("database-documentation.md")
        assert result.ok
        assert result.data["name"] == "database-documentation"
        assert result.data["body"].startswith("# Database Documentation")
        assert "kind: template" not in result.data["body"]

    def test_unknown_name(self, workspace: Workspace) -> None:
        result = DocumentService(workspace).show("nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail["available"] == PACKAGED


class TestExport:
    def test_exports_everything(self, workspace: Workspace, workspace_root: Path) -> None:
        result = DocumentService(workspace).export([], "docs")
        assert result.ok
        assert result.data["count"] == 4
        exported = sorted(p.name for p in (workspace_root / "docs").iterdir())
        assert exported == [f"{n}.md" for n in PACKAGED]

    def test_exports_selected(self, workspace: Workspace, workspace_root: Path) -> None:
        result = DocumentService(workspace).export(["security-guidelines"], "docs")
        assert result.ok
        text = (workspace_root / "docs" / "security-guidelines.md").read_text(encoding="utf-8")
        assert text.startswith("# Security Guidelines")

    def test_existing_file_skipped_without_force(
        self, workspace: Workspace, workspace_root: Path
    ) -> None:
        target = workspace_root / "docs" / "security-guidelines.md"
        target.parent.mkdir()
        target.write_text("mine", encoding="utf-8")

        result = DocumentService(workspace).export(["security-guidelines"], "docs")

        assert result.ok
        assert result.data["count"] == 0
        assert result.data["skipped"] == [str(target)]
        assert result.warnings
        assert target.read_text(encoding="utf-8") == "mine"

    def test_force_overwrites(self, workspace: Workspace, workspace_root: Path) -> None:
        target = workspace_root / "docs" / "security-guidelines.md"
        target.parent.mkdir()
        target.write_text("mine", encoding="utf-8")

        result = DocumentService(workspace).export(["security-guidelines"], "docs", force=True)

        assert result.data["count"] == 1
        assert target.read_text(encoding="utf-8") != "mine"

    def test_unknown_name_fails_before_writing(
        self, workspace: Workspace, workspace_root: Path
    ) -> None:
        result = DocumentService(workspace).export(["security-guidelines", "nope"], "docs")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert not (workspace_root / "docs").exists()


class TestUnreadableOverride:
    def test_undecodable_override_is_skipped(self, workspace: Workspace) -> None:
        workspace.override_dir.mkdir(parents=True)
        (workspace.override_dir / "security-guidelines.md").write_bytes(b"# T\n\xff\xfe bad\n")

        result = DocumentService(workspace).list_documents()

        assert result.ok
        names = [i["name"] for i in result.data["items"]]
        assert "security-guidelines" not in names
        assert "database-documentation" in names
        assert any("security-guidelines.md" in w for w in result.warnings)
