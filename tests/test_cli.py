import json

from conftest import read_package, write_plugin, write_project
from typer.testing import CliRunner

from scaffold_kit.cli import app
from scaffold_kit.config import DATA_DIR

runner = CliRunner()
BUNDLED = str(DATA_DIR / "plugins")


def _invoke(*args, plugins_dir=BUNDLED, **kwargs):
    return runner.invoke(app, ["--plugins-dir", str(plugins_dir), *args], **kwargs)


def test_plugin_list_bundled():
    result = _invoke("plugin", "list")
    assert result.exit_code == 0, result.output
    assert "praxis" in result.output
    assert "adp" in result.output
    assert "planned" in result.output


def test_plugin_list_empty_root(tmp_path):
    result = _invoke("plugin", "list", plugins_dir=tmp_path)
    assert result.exit_code == 0
    assert "No plugins found" in result.output


def test_plugin_info_ready():
    result = _invoke("plugin", "info", "praxis")
    assert result.exit_code == 0, result.output
    assert "@plures/praxis" in result.output
    assert "praxis.config.js" in result.output
    assert "Ready to install" in result.output


def test_plugin_info_planned():
    result = _invoke("plugin", "info", "tauri-updater")
    assert result.exit_code == 0, result.output
    assert "not yet available" in result.output


def test_plugin_info_unknown_plugin_exits_nonzero():
    result = _invoke("plugin", "info", "does-not-exist")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_plugin_info_malformed_manifest(tmp_path):
    write_plugin(tmp_path, "broken", "{ nope")
    result = _invoke("plugin", "info", "broken", plugins_dir=tmp_path)
    assert result.exit_code == 1
    assert "Failed to parse" in result.output


def test_plugin_add_and_remove_round_trip(tmp_path):
    project = write_project(tmp_path / "app")
    original = (project / "package.json").read_text()

    added = _invoke("plugin", "add", "adp", "--project", str(project))
    assert added.exit_code == 0, added.output
    assert "installed successfully" in added.output
    assert read_package(project)["devDependencies"]["@plures/adp"] == "github:plures/adp"
    assert (project / ".adp-config.json").exists()

    removed = _invoke("plugin", "remove", "adp", "--project", str(project))
    assert removed.exit_code == 0, removed.output
    assert "Removed 2 configuration file(s)" in removed.output
    assert (project / "package.json").read_text() == original
    assert not (project / ".adp-config.json").exists()


def test_plugin_add_planned_is_not_fatal(tmp_path):
    project = write_project(tmp_path / "app")
    result = _invoke("plugin", "add", "tauri-updater", "--project", str(project))
    assert result.exit_code == 0, result.output
    assert "planned" in result.output


def test_plugin_add_without_package_json_fails(tmp_path):
    result = _invoke("plugin", "add", "adp", "--project", str(tmp_path))
    assert result.exit_code == 1
    assert "package.json not found" in result.output


def test_plugin_remove_not_installed_reports_no_changes(tmp_path):
    project = write_project(tmp_path / "app")
    result = _invoke("plugin", "remove", "praxis", "--project", str(project))
    assert result.exit_code == 0, result.output
    assert "No changes made" in result.output
    assert "Updated package.json" not in result.output


def test_plugin_lint_single_clean_plugin():
    result = _invoke("plugin", "lint", "adp")
    assert result.exit_code == 0, result.output
    assert "0 errors found" in result.output


def test_plugin_lint_all_reports_undeclared_keys():
    result = _invoke("plugin", "lint")
    assert result.exit_code == 1
    assert "svelte" in result.output


def test_new_creates_project_interactively(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    # name (default), description (default), author, identifier (default), plugins
    answers = "\n\nAda Lovelace\n\n2\n"
    result = runner.invoke(app, ["--plugins-dir", BUNDLED, "new", "demo"], input=answers)
    assert result.exit_code == 0, result.output
    project = tmp_path / "demo"
    pkg = json.loads((project / "package.json").read_text())
    assert pkg["name"] == "demo"
    assert pkg["author"] == "Ada Lovelace"
    assert pkg["devDependencies"]["@plures/adp"] == "github:plures/adp"
    assert (project / ".gitignore").exists()
    assert "created successfully" in result.output


def test_new_existing_directory_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "demo").mkdir()
    result = runner.invoke(app, ["--plugins-dir", BUNDLED, "new", "demo"])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_plugin_lint_keeps_going_past_missing_manifest(tmp_path):
    (tmp_path / "aaa-empty").mkdir()
    write_plugin(tmp_path, "zzz-good", {"name": "zzz-good", "version": "1.0.0"})
    result = _invoke("plugin", "lint", plugins_dir=tmp_path)
    assert result.exit_code == 1
    assert "No manifest.json found" in result.output
    assert "zzz-good: OK" in result.output
    assert "1 plugin(s) with errors" in result.output


def test_plugin_lint_reports_malformed_manifest(tmp_path):
    write_plugin(tmp_path, "broken", "{ nope")
    result = _invoke("plugin", "lint", plugins_dir=tmp_path)
    assert result.exit_code == 1
    assert "Failed to parse" in result.output


def _binary_template(root):
    (root / "config").mkdir(parents=True)
    (root / "config" / "manifest.json").write_text(json.dumps({"plugins": {}}))
    (root / "config" / "placeholders.json").write_text(
        json.dumps({"placeholders": {"PROJECT_NAME": {"description": "Name", "required": True}}})
    )
    (root / "package.json").write_text('{"name": "{{PROJECT_NAME_SLUG}}"}\n')
    (root / "icons").mkdir()
    (root / "icons" / "icon.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe")
    return root


def test_new_copies_binary_template_assets(tmp_path, monkeypatch):
    template = _binary_template(tmp_path / "template")
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(
        app,
        ["--plugins-dir", str(tmp_path / "plugins"), "--template-dir", str(template), "new", "app2"],
        input="\n",
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "app2" / "icons" / "icon.png").read_bytes() == b"\x89PNG\r\n\x1a\n\xff\xfe"
    assert read_package(tmp_path / "app2")["name"] == "app2"


def test_os_errors_are_reported_not_raised(tmp_path, monkeypatch):
    project = write_project(tmp_path / "app")
    assert _invoke("plugin", "add", "adp", "--project", str(project)).exit_code == 0

    def denied(self, *args, **kwargs):
        raise PermissionError("Permission denied")

    monkeypatch.setattr("scaffold_kit.manager._descriptor.PackageDescriptor.save", denied)
    result = _invoke("plugin", "remove", "adp", "--project", str(project))
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Permission denied" in result.output
    assert not isinstance(result.exception, PermissionError)
