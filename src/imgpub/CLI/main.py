"""
Command Line Interface for imgpub.
"""
import logging

import click

from .. import __version__
from ..errors import ImgpubError
from ..MANAGERS.publication_planner import PublicationPlanner
from ..PARSERS.config_loader import build_request, load_credentials, load_environment
from ..REGISTRY.registry_session import RegistrySession
from ..RUNNERS.command_runner import DEFAULT_WORK_DIR, CommandRunner, DryRunCommandRunner
from ..UTILS.logging_setup import setup_logging
from ..UTILS.tag_sanitizer import tag_warnings

logger = logging.getLogger(__name__)

ENV_PREFIX = "ESTAFETTE_EXTENSION_"


@click.command()
@click.option('--action', envvar=ENV_PREFIX + 'ACTION', help='Any of the following actions: build, push, tag.')
@click.option('--repositories', envvar=ENV_PREFIX + 'REPOSITORIES',
              help='Comma separated repositories the image is built for, pushed to or tagged in.')
@click.option('--container', envvar=ENV_PREFIX + 'CONTAINER',
              help='Name of the container to build, defaults to the app label.')
@click.option('--tags', envvar=ENV_PREFIX + 'TAGS', help='Comma separated tags the image receives.')
@click.option('--path', envvar=ENV_PREFIX + 'PATH', default='.', show_default=True,
              help='Directory to build the container from.')
@click.option('--dockerfile', envvar=ENV_PREFIX + 'DOCKERFILE', default='Dockerfile', show_default=True,
              help='Dockerfile to build.')
@click.option('--copy', envvar=ENV_PREFIX + 'COPY',
              help='Comma separated files or directories to copy into the build directory.')
@click.option('--args', 'build_args', envvar=ENV_PREFIX + 'ARGS',
              help='Comma separated environment variables to pass as build arguments.')
@click.option('--work-dir', envvar=ENV_PREFIX + 'WORK_DIR', default=DEFAULT_WORK_DIR, show_default=True,
              help='Directory commands are run in.')
@click.option('--dry-run', envvar=ENV_PREFIX + 'DRY_RUN', is_flag=True, help='Log commands without running them.')
@click.option('--verbose', '-v', is_flag=True, help='Log debug output.')
@click.pass_context
def cli(ctx, action, repositories, container, tags, path, dockerfile, copy, build_args, work_dir, dry_run, verbose):
    """
    imgpub - build, push and tag container images in a CI pipeline step.

    Every option can also be set through its ESTAFETTE_EXTENSION_* environment variable.
    """
    setup_logging(verbose)
    logger.info("Starting imgpub version %s...", __version__)

    try:
        request = build_request(
            action=action,
            repositories=repositories,
            container=container,
            tags=tags,
            path=path,
            dockerfile=dockerfile,
            copy=copy,
            args=build_args,
        )
        for warning in tag_warnings(request.default_tag):
            logger.warning("Default tag '%s' may be rejected: %s", request.default_tag, warning)

        runner = (ctx.obj or {}).get('runner')
        if runner is None:
            runner = DryRunCommandRunner(work_dir) if dry_run else CommandRunner(work_dir)

        planner = PublicationPlanner(RegistrySession(load_credentials()), runner)
        planner.execute(request)
    except ImgpubError as e:
        logger.error(str(e))
        ctx.exit(1)

    logger.info("Finished %s for %s", request.action.value, request.source_image)


def main():
    """
    Main entry point for the CLI.
    """
    load_environment()
    cli(obj={})


if __name__ == '__main__':
    main()
