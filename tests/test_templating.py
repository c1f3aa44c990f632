from datetime import date

from scaffold_kit.templating import (
    EXCLUDED_DIRS,
    camelize,
    derive_bindings,
    materialize,
    slugify,
    substitute,
)

# --- substitute ---


def test_substitute_replaces_every_occurrence():
    out = substitute("Hello {{NAME}}, welcome to {{NAME}}!", {"NAME": "Acme"})
    assert out == "Hello Acme, welcome to Acme!"


def test_substitute_leaves_unbound_tokens():
    out = substitute("Hello {{NAME}} from {{MISSING}}", {"NAME": "Acme"})
    assert out == "Hello Acme from {{MISSING}}"


def test_substitute_is_case_sensitive_and_exact():
    content = "{{name}} {{ NAME }} {{NAME}}"
    assert substitute(content, {"NAME": "x"}) == "{{name}} {{ NAME }} x"


def test_substitute_values_are_literal():
    assert substitute("{{A}}", {"A": r"\1 $0"}) == r"\1 $0"


def test_substitute_with_no_bindings_is_identity():
    assert substitute("{{X}}", {}) == "{{X}}"


# --- derivations ---


def test_slug_and_camel_from_project_name():
    assert slugify("My Cool App") == "my-cool-app"
    assert camelize("My Cool App") == "myCoolApp"


def test_slug_collapses_whitespace_runs():
    assert slugify("My   Cool\tApp") == "my-cool-app"


def test_camel_single_word():
    assert camelize("Widget") == "widget"
    assert camelize("") == ""


def test_derive_bindings_adds_slug_camel_and_year():
    bindings = derive_bindings({"PROJECT_NAME": "My Cool App", "AUTHOR": "Ada"}, today=date(2031, 5, 1))
    assert bindings == {
        "PROJECT_NAME": "My Cool App",
        "AUTHOR": "Ada",
        "PROJECT_NAME_SLUG": "my-cool-app",
        "PROJECT_NAME_CAMEL": "myCoolApp",
        "YEAR": "2031",
    }


def test_derive_bindings_year_is_four_digits():
    assert len(derive_bindings({"PROJECT_NAME": "x"})["YEAR"]) == 4


# --- materialize ---


def _template(tmp_path):
    src = tmp_path / "template"
    (src / "src" / "lib").mkdir(parents=True)
    (src / "README.md").write_text("# {{PROJECT_NAME}}\n")
    (src / "src" / "lib" / "app.js").write_text("export const id = '{{PROJECT_NAME_SLUG}}';\n")
    return src


def test_materialize_copies_tree_with_substitution(tmp_path):
    src = _template(tmp_path)
    dest = tmp_path / "out"
    materialize(src, dest, {"PROJECT_NAME": "Demo", "PROJECT_NAME_SLUG": "demo"})
    assert (dest / "README.md").read_text() == "# Demo\n"
    assert (dest / "src" / "lib" / "app.js").read_text() == "export const id = 'demo';\n"


def test_materialize_skips_excluded_directories(tmp_path):
    src = _template(tmp_path)
    for name in EXCLUDED_DIRS:
        (src / name / "nested").mkdir(parents=True)
        (src / name / "nested" / "file.txt").write_text("x")
    dest = tmp_path / "out"
    materialize(src, dest, {})
    assert not (dest / ".git").exists()
    assert not (dest / "node_modules").exists()
    assert not (dest / "target").exists()
    assert (dest / "README.md").exists()


def test_materialize_only_skips_exact_names(tmp_path):
    src = _template(tmp_path)
    (src / ".github").mkdir()
    (src / ".github" / "ci.yml").write_text("on: push\n")
    dest = tmp_path / "out"
    materialize(src, dest, {})
    assert (dest / ".github" / "ci.yml").read_text() == "on: push\n"


def test_materialize_into_existing_destination_overwrites(tmp_path):
    src = _template(tmp_path)
    dest = tmp_path / "out"
    dest.mkdir()
    (dest / "README.md").write_text("old")
    (dest / "keep.txt").write_text("keep")
    materialize(src, dest, {"PROJECT_NAME": "New"})
    assert (dest / "README.md").read_text() == "# New\n"
    assert (dest / "keep.txt").read_text() == "keep"


def test_materialize_single_file(tmp_path):
    src = tmp_path / "one.txt"
    src.write_text("{{A}}")
    dest = tmp_path / "deep" / "er" / "one.txt"
    materialize(src, dest, {"A": "a"})
    assert dest.read_text() == "a"


def test_materialize_copies_binary_files_verbatim(tmp_path):
    src = _template(tmp_path)
    icon = b"\x89PNG\r\n\x1a\n{{PROJECT_NAME}}\xff\xfe"
    (src / "icons").mkdir()
    (src / "icons" / "icon.png").write_bytes(icon)
    dest = tmp_path / "out"
    materialize(src, dest, {"PROJECT_NAME": "Demo"})
    assert (dest / "icons" / "icon.png").read_bytes() == icon
    assert (dest / "README.md").read_text() == "# Demo\n"
