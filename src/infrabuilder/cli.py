import functools
import json
import logging
import traceback

import click
import yaml

from . import __version__, constants
from .config import Config
from .context import TaskGraph
from .model import Builder
from .utils import parse_module_levels, setup_logger
from .exceptions import (
    InfraBuilderError,
    ConfigurationError,
    DefinitionError,
    BuildError,
)


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logging with optional per-module levels and log file"""
    module_levels = parse_module_levels(log_levels) if log_levels else None
    setup_logger(debug=debug, module_levels=module_levels, log_file=log_file)


def handle_errors(func):
    """Log application errors and abort instead of printing a stack trace"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _abort("Configuration error", e)
        except DefinitionError as e:
            _abort("Definition error", e)
        except BuildError as e:
            _abort("Build error", e)
        except InfraBuilderError as e:
            _abort("An unexpected application error occurred", e)
    return wrapper


def _abort(label: str, error: Exception):
    logging.error(f"{label}: {error}")
    ctx = click.get_current_context()
    if ctx.find_root().obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


def render(graph: TaskGraph, fmt: str) -> str:
    tasks = graph.dump()
    if fmt == "json":
        return json.dumps(tasks, indent=2) + "\n"
    return yaml.safe_dump(tasks, default_flow_style=False, sort_keys=False)


@handle_errors
def do_build(config_file: str, output: str, fmt: str):
    """Execute build command"""
    graph = Builder(Config(config_file)).run()
    content = render(graph, fmt)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(content)
        logging.info(f"Wrote {len(graph)} tasks to {output}")
    else:
        click.echo(content, nl=False)


@handle_errors
def do_order(config_file: str):
    """Execute order command"""
    graph = Builder(Config(config_file)).run()
    for i, key in enumerate(graph.order(), start=1):
        deps = graph.dependencies(key)
        suffix = f"  <- {', '.join(deps)}" if deps else ""
        click.echo(f"{i:>3}. {key}{suffix}")


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'subnet=DEBUG,ctx=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='infrabuilder')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """Infra Builder - turn a cluster specification into infrastructure tasks"""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@click.argument('config_file', type=click.Path(dir_okay=False))
@click.option('-o', '--output', help='Write the task list to this file instead of stdout')
@click.option('--format', 'fmt', type=click.Choice(constants.OUTPUT_FORMATS), default='yaml', show_default=True,
              help='Output format')
def build(config_file, output, fmt):
    """Build the task graph for CONFIG_FILE"""
    do_build(config_file, output, fmt)


@cli.command()
@click.argument('config_file', type=click.Path(dir_okay=False))
def order(config_file):
    """Print the tasks of CONFIG_FILE in the order they can be applied"""
    do_order(config_file)
