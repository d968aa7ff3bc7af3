"""
ToneSight Command Line Interface

Main CLI entry point for Shadows/Highlights correction of still images.
"""

import click
import logging
from typing import Optional

from ..config import load_config, get_config_value
from ..utils.logging import setup_console_logging
from .tone_commands import correct, compare, batch, presets_command

logger = logging.getLogger(__name__)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, config: Optional[str] = None, verbose: bool = False, quiet: bool = False):
    """
    ToneSight - Shadows/Highlights tone correction

    Lifts shadows and recovers highlights on the Lab lightness channel while
    leaving colour balance untouched.
    """
    if ctx.obj is None:
        ctx.obj = {}

    ctx.obj['config'] = load_config(config)

    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'ERROR'
    else:
        level = get_config_value(ctx.obj['config'], 'logging.level', 'INFO')
    setup_console_logging(level, color=get_config_value(ctx.obj['config'], 'logging.color', True))

    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet


main.add_command(correct)
main.add_command(compare)
main.add_command(batch)
main.add_command(presets_command)

__all__ = ['main']
