from __future__ import annotations

from pathlib import Path

import yaml

from dicer.core.scan.scan_template import scan_template


DEFAULT_TEMPLATES: dict[str, str] = {
    "echo": "%1",
    "first": "%[1 1]",
    "last": "%[1 $]",
    # Paths.
    "basename": "%[1/$]",
    "dirname": "%[1/-$]",
    # Hostnames.
    "host": "%[1.1]",
    "domain": "%[1.-1]",
}


class TemplateConfigError(ValueError):
    """A template file is unreadable as name -> template, or a template is malformed."""


def load_template_file(path: str | Path) -> dict[str, str]:
    """Load named templates from a YAML file.

    Format:
      <name>: "<template>"

    Templates are scanned at load time so a missing ``]`` is reported
    against the template name rather than on first use.
    """
    p = Path(path)
    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise TemplateConfigError("template file must be a mapping of name -> template string")

    out: dict[str, str] = {}
    for k, v in raw.items():
        if not isinstance(k, str) or not k.strip():
            raise TemplateConfigError("template names must be non-empty strings")
        # "" is allowed; it expands to input 1 like any reference-free template.
        if not isinstance(v, str):
            raise TemplateConfigError(f"template '{k}' must be a string")
        _, err = scan_template(v)
        if err is not None:
            raise TemplateConfigError(f"template '{k}': {err}")
        out[k.strip()] = v
    return out


def merged_templates(overrides: dict[str, str] | None = None) -> dict[str, str]:
    """Built-in templates with file entries layered on top, file entries winning by name."""
    merged = dict(DEFAULT_TEMPLATES)
    if overrides:
        merged.update(overrides)
    return merged


def load_and_merge(template_file: str | None) -> dict[str, str]:
    """Templates visible to the CLI: the built-ins, plus ``template_file`` when given."""
    overrides = load_template_file(template_file) if template_file else None
    return merged_templates(overrides)
