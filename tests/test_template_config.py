from pathlib import Path

import pytest

from dicer import expand
from dicer.core.expand.template_config import (
    DEFAULT_TEMPLATES,
    TemplateConfigError,
    load_and_merge,
    load_template_file,
    merged_templates,
)

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def test_default_templates_expand():
    assert expand(DEFAULT_TEMPLATES["host"], ["web1.example.com"]) == "web1"
    assert expand(DEFAULT_TEMPLATES["domain"], ["web1.example.com"]) == "example.com"
    assert expand(DEFAULT_TEMPLATES["basename"], ["/static/css/site.css"]) == "site.css"
    assert expand(DEFAULT_TEMPLATES["dirname"], ["/static/css/site.css"]) == "/static/css"
    assert expand(DEFAULT_TEMPLATES["first"], ["GET /x HTTP/1.1"]) == "GET"
    assert expand(DEFAULT_TEMPLATES["last"], ["GET /x HTTP/1.1"]) == "HTTP/1.1"


def test_load_example_file():
    templates = load_template_file(EXAMPLES / "templates.yaml")
    assert templates["tld"] == "%[1.$]"
    assert set(templates) == {"user", "tld", "request"}


def test_merge_overrides_and_adds():
    merged = merged_templates({"host": "%[1.2]", "extra": "%2"})
    assert merged["host"] == "%[1.2]"
    assert merged["extra"] == "%2"
    assert merged["echo"] == DEFAULT_TEMPLATES["echo"]
    # defaults are not mutated
    assert DEFAULT_TEMPLATES["host"] == "%[1.1]"


def test_load_and_merge_without_file():
    assert load_and_merge(None) == DEFAULT_TEMPLATES


def test_empty_file(tmp_path: Path):
    p = tmp_path / "t.yaml"
    p.write_text("", encoding="utf-8")
    assert load_template_file(p) == {}


def test_rejects_non_mapping(tmp_path: Path):
    p = tmp_path / "t.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(TemplateConfigError):
        load_template_file(p)


def test_rejects_non_string_template(tmp_path: Path):
    p = tmp_path / "t.yaml"
    p.write_text("bad: [1, 2]\n", encoding="utf-8")
    with pytest.raises(TemplateConfigError, match="bad"):
        load_template_file(p)


def test_rejects_unterminated_template(tmp_path: Path):
    p = tmp_path / "t.yaml"
    p.write_text('broken: "x %[1.2"\n', encoding="utf-8")
    with pytest.raises(TemplateConfigError) as exc:
        load_template_file(p)
    assert "char 3: dicer expression missing closing ]" in str(exc.value)


def test_missing_file_raises_file_not_found(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_and_merge(str(tmp_path / "nope.yaml"))


def test_empty_template_is_allowed(tmp_path: Path):
    p = tmp_path / "t.yaml"
    p.write_text('plain: ""\n', encoding="utf-8")
    templates = load_template_file(p)
    assert templates == {"plain": ""}
    assert expand(templates["plain"], ["first", "second"]) == "first"
