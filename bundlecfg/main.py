"""bundlecfg CLI entry point."""

from __future__ import annotations

import json
import logging
import zipfile
from pathlib import Path

import click

from bundlecfg.builders import BundleBuilder
from bundlecfg.config import BundleCfgSettings, load_config
from bundlecfg.core.logging import setup_logging
from bundlecfg.errors import BundleError
from bundlecfg.models.bundle import BundleContainer, BundleKind, parse_kind

logger = logging.getLogger(__name__)


@click.group()
@click.option("--config", "config_path", default=None, help="YAML settings file.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """Inspect, build and package bundle manifests."""
    settings = load_config(config_path) if config_path else BundleCfgSettings()
    setup_logging(settings.log_level, json_output=settings.json_logs)
    ctx.obj = settings


def _load(path: Path, settings: BundleCfgSettings) -> BundleContainer:
    strict = settings.strict_identity
    if zipfile.is_zipfile(path):
        return BundleContainer.from_zipfile(path, strict_identity=strict)
    return BundleContainer.from_file(path, strict_identity=strict)


def _save(container: BundleContainer, output: Path | None) -> None:
    if output is None:
        click.echo(container.to_text(), nl=False)
    elif output.suffix == ".zip":
        container.to_zipfile(output)
    else:
        container.to_file(output)


_existing_path = click.Path(exists=True, dir_okay=False, path_type=Path)
_output_path = click.Path(dir_okay=False, path_type=Path)


@cli.command("show")
@click.argument("path", type=_existing_path)
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON.")
@click.pass_obj
def show_command(settings: BundleCfgSettings, path: Path, as_json: bool) -> None:
    """Print the manifest of a bundle.ini file or bundle zip."""
    try:
        container = _load(path, settings)
    except BundleError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        record = container.bundle
        fields = {name: getattr(record, name) for name in type(record).model_fields}
        click.echo(json.dumps(fields, indent=2))
    else:
        click.echo(container.to_text(), nl=False)


@cli.command("validate")
@click.argument("path", type=_existing_path)
@click.pass_obj
def validate_command(settings: BundleCfgSettings, path: Path) -> None:
    """Check that a manifest decodes cleanly."""
    try:
        _load(path, settings)
    except BundleError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo("ok")


@cli.command("extract")
@click.argument("archive", type=_existing_path)
@click.option("-o", "--output", type=_output_path, default=None)
@click.pass_obj
def extract_command(settings: BundleCfgSettings, archive: Path, output: Path | None) -> None:
    """Copy bundle.ini out of a bundle zip."""
    try:
        container = BundleContainer.from_zipfile(
            archive, strict_identity=settings.strict_identity
        )
        _save(container, output)
    except BundleError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command("pack")
@click.argument("archive", type=_output_path)
@click.argument("manifest", type=_existing_path)
@click.pass_obj
def pack_command(settings: BundleCfgSettings, archive: Path, manifest: Path) -> None:
    """Store MANIFEST in ARCHIVE as bundle.ini."""
    try:
        container = BundleContainer.from_file(manifest, strict_identity=settings.strict_identity)
        container.to_zipfile(archive)
    except BundleError as exc:
        raise click.ClickException(str(exc)) from exc
    logger.debug("packed %s into %s", manifest, archive)


@cli.command("new")
@click.argument("name")
@click.option(
    "--type",
    "kind",
    type=click.Choice([kind.value for kind in BundleKind]),
    required=True,
)
@click.option("--store-id", default=None)
@click.option("--homebrew-id", default=None)
@click.option("--exec", "exec_path", default=None)
@click.option("--version", default=None)
@click.option("--prefer-xbox-mode", is_flag=True)
@click.option("--launcher", default=None, help="Launcher this bundle requires.")
@click.option("--background", is_flag=True)
@click.option("--launcher-exec", default=None, help="Launcher this bundle provides.")
@click.option("--launcher-tag", "launcher_tags", multiple=True)
@click.option("--encrypted-image", default=None)
@click.option("-o", "--output", type=_output_path, default=None)
def new_command(
    name: str,
    kind: str,
    store_id: str | None,
    homebrew_id: str | None,
    exec_path: str | None,
    version: str | None,
    prefer_xbox_mode: bool,
    launcher: str | None,
    background: bool,
    launcher_exec: str | None,
    launcher_tags: tuple[str, ...],
    encrypted_image: str | None,
    output: Path | None,
) -> None:
    """Create a manifest for a store or homebrew bundle."""
    if (store_id is None) == (homebrew_id is None):
        raise click.UsageError("pass exactly one of --store-id or --homebrew-id")
    if launcher_tags and launcher_exec is None:
        raise click.UsageError("--launcher-tag requires --launcher-exec")

    builder = BundleBuilder(name, parse_kind(kind))
    if homebrew_id is not None:
        store_only = {
            "--background": background,
            "--launcher-exec": launcher_exec,
            "--encrypted-image": encrypted_image,
        }
        rejected = [flag for flag, value in store_only.items() if value]
        if rejected:
            raise click.UsageError(
                f"{', '.join(rejected)} cannot be used with --homebrew-id"
            )
        container = (
            builder.homebrew_id(homebrew_id)
            .set_exec(exec_path)
            .set_version(version)
            .set_prefer_xbox_mode(prefer_xbox_mode)
            .set_requires_launcher(launcher)
            .build()
        )
    else:
        assert store_id is not None
        container = (
            builder.store_id(store_id)
            .set_exec(exec_path)
            .set_version(version)
            .set_background(background)
            .set_prefer_xbox_mode(prefer_xbox_mode)
            .set_requires_launcher(launcher)
            .set_provides_launcher(launcher_exec, launcher_tags)
            .set_encrypted_image(encrypted_image)
            .build()
        )

    try:
        _save(container, output)
    except BundleError as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    cli()
