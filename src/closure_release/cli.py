import click
import sys
from typing import Optional

from . import __version__
from .exceptions import CommitFailed, ReleaseError
from .pipeline import ReleasePipeline
from .utils import load_config, setup_logging


def _build_pipeline(config: Optional[str], manifest: Optional[str], verbose: bool,
                    dry_run: bool = False) -> ReleasePipeline:
    """Load configuration, apply CLI overrides and set up logging."""
    app_config = load_config(config or 'release.yaml')

    # Override config with CLI options
    if manifest:
        app_config['manifest']['path'] = manifest
    if verbose:
        app_config['logging']['level'] = 'DEBUG'

    setup_logging(app_config['logging'])
    return ReleasePipeline(app_config, dry_run=dry_run)


def _fail(error: Exception, verbose: bool):
    click.echo(f"❌ Error: {error}", err=True)
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(2)


config_option = click.option('--config', '-c',
                             type=click.Path(exists=True),
                             help='Configuration file path')
manifest_option = click.option('--manifest', '-m',
                               type=click.Path(),
                               help='Path to the package manifest (default: package.json)')
verbose_option = click.option('--verbose', '-v',
                              is_flag=True,
                              help='Enable verbose logging')


@click.command()
@config_option
@manifest_option
@verbose_option
def test(config: Optional[str], manifest: Optional[str], verbose: bool):
    """Run the package test command."""
    try:
        pipeline = _build_pipeline(config, manifest, verbose)
        pipeline.run_tests()
        click.echo("✅ Tests passed")
    except ReleaseError as e:
        _fail(e, verbose)


@click.command('release-if-changed')
@config_option
@manifest_option
@verbose_option
@click.option('--skip-tests',
              is_flag=True,
              help='Do not run the test command first')
@click.option('--dry-run',
              is_flag=True,
              help='Show the version decision without writing or committing')
def release_if_changed(config: Optional[str], manifest: Optional[str], verbose: bool,
                       skip_tests: bool, dry_run: bool):
    """
    Increment the package version if the last commit did not.

    A newer compiler major version forces a major release; any other change
    is a minor release.
    """
    try:
        pipeline = _build_pipeline(config, manifest, verbose, dry_run=dry_run)
        result = pipeline.release_if_changed(run_tests=not skip_tests)
    except CommitFailed as e:
        click.echo("⚠️  Manifest was updated but the commit was not recorded", err=True)
        _fail(e, verbose)
    except ReleaseError as e:
        _fail(e, verbose)

    if result.already_bumped:
        click.echo(f"✅ Version {result.current_version} was already incremented by the last commit")
    elif dry_run and result.would_write:
        click.echo(f"🔍 Would increment version {result.current_version} -> {result.next_version}")
    elif result.written:
        click.echo(f"🎉 Version incremented {result.current_version} -> {result.next_version}")
    else:
        click.echo(f"✅ Version {result.current_version} is up to date")


@click.command('is-release-needed')
@config_option
@manifest_option
@verbose_option
def is_release_needed(config: Optional[str], manifest: Optional[str], verbose: bool):
    """
    Check whether the local version is newer than the latest published one.

    Exits with status 1 and prints "Release needed" when it is.
    """
    try:
        pipeline = _build_pipeline(config, manifest, verbose)
        check = pipeline.check_release_needed()
    except ReleaseError as e:
        _fail(e, verbose)

    if check.release_needed:
        click.echo(f"Release needed: {check.local_version} > {check.latest_published}")
        sys.exit(1)
    click.echo(f"No release needed: latest published version is {check.latest_published}")


@click.command('next-version')
@config_option
@manifest_option
@verbose_option
def next_version(config: Optional[str], manifest: Optional[str], verbose: bool):
    """Print the version release-if-changed would persist."""
    try:
        pipeline = _build_pipeline(config, manifest, verbose)
        result = pipeline.plan_next_version()
    except ReleaseError as e:
        _fail(e, verbose)

    click.echo(str(result.next_version))


@click.group()
@click.version_option(version=__version__, prog_name="closure-release")
def main():
    """closure-release - Automated version decisions for the Closure Compiler npm package."""
    pass


# Add commands to the main group
main.add_command(test)
main.add_command(release_if_changed)
main.add_command(is_release_needed)
main.add_command(next_version)


if __name__ == '__main__':
    main()
