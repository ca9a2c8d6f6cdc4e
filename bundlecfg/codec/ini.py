"""Key/value text grammar underneath the manifest record.

Manifests are INI-style documents: ``[Section]`` headers followed by
``Key=Value`` lines. This module only deals with sections and raw string
values; typed decoding lives on the record model.
"""

from __future__ import annotations

import configparser
import io
from collections.abc import Mapping

from bundlecfg.errors import EncodeError, MalformedManifest

# configparser merges [DEFAULT] keys into every section. In a manifest
# DEFAULT is just another section, so move the special name out of reach.
_NO_DEFAULT_SECTION = "\x00bundlecfg-defaults"


class _ManifestParser(configparser.ConfigParser):
    def __init__(self) -> None:
        super().__init__(
            delimiters=("=",),
            comment_prefixes=("#", ";"),
            inline_comment_prefixes=None,
            strict=True,
            empty_lines_in_values=False,
            interpolation=None,
            default_section=_NO_DEFAULT_SECTION,
        )

    def optionxform(self, optionstr: str) -> str:
        # Keys are case-sensitive.
        return optionstr


def parse_sections(text: str) -> dict[str, dict[str, str]]:
    """Parse manifest text into ``{section: {key: value}}`` preserving order."""
    parser = _ManifestParser()
    try:
        parser.read_string(text, source="<manifest>")
    except configparser.Error as exc:
        raise MalformedManifest(_describe_parse_error(exc)) from exc

    sections: dict[str, dict[str, str]] = {}
    for section in parser.sections():
        values: dict[str, str] = {}
        for key, value in parser.items(section, raw=True):
            if "\n" in value:
                raise MalformedManifest(
                    f"[{section}] {key}: continuation lines are not supported"
                )
            values[key] = value
        sections[section] = values
    return sections


def render_section(section: str, values: Mapping[str, str]) -> str:
    """Render one section as ``Key=Value`` lines in the mapping's order."""
    for key, value in values.items():
        if "\n" in value or "\r" in value:
            raise EncodeError(f"value of '{key}' cannot span multiple lines")
        if value != value.strip():
            raise EncodeError(f"value of '{key}' has leading or trailing whitespace")

    parser = _ManifestParser()
    parser.add_section(section)
    for key, value in values.items():
        parser.set(section, key, value)

    buffer = io.StringIO()
    parser.write(buffer, space_around_delimiters=False)
    return buffer.getvalue()


def _describe_parse_error(exc: configparser.Error) -> str:
    if isinstance(exc, configparser.MissingSectionHeaderError):
        return f"line {exc.lineno}: key outside of any section: {exc.line.strip()!r}"
    if isinstance(exc, configparser.DuplicateOptionError):
        return f"line {exc.lineno}: duplicate key '{exc.option}' in [{exc.section}]"
    if isinstance(exc, configparser.DuplicateSectionError):
        return f"line {exc.lineno}: duplicate section [{exc.section}]"
    if isinstance(exc, configparser.ParsingError):
        lines = ", ".join(f"line {lineno}: {line.strip()!r}" for lineno, line in exc.errors)
        return f"malformed lines: {lines}"
    return str(exc)


__all__ = ["parse_sections", "render_section"]
