# -*- coding: utf-8 -*-
"""Command line interface for fstash."""

import json
import logging
import os
from functools import wraps

import click

from .exceptions import FStashError
from .fstash import open_stash

DEFAULT_HOME = os.path.join("~", ".fstash")

NAME_HELP = "name of this stash, lower case, only numbers, alphabet and - and _"


def parse_template_data(pairs):
    """Parse ``FILE=JSON`` arguments into template data.

    >>> parse_template_data(['file2={"AppName": "fstash"}'])
    {'file2': {'AppName': 'fstash'}}
    """
    data = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(
                "expected FILE=JSON, got {0!r}".format(pair), param_hint="DATA")

        try:
            variables = json.loads(raw)
        except ValueError as error:
            raise click.BadParameter(
                "invalid JSON for {0}: {1}".format(key, error), param_hint="DATA")

        if not isinstance(variables, dict):
            raise click.BadParameter(
                "template data for {0} must be a JSON object".format(key),
                param_hint="DATA")

        data[key] = variables

    return data


def handle_errors(func):
    """Report fstash errors as a message and a non-zero exit status."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FStashError as error:
            raise click.ClickException(str(error))

    return wrapper


@click.group()
@click.option("--home",
              envvar="FSTASH_HOME",
              default=DEFAULT_HOME,
              show_default=True,
              type=click.Path(file_okay=False),
              help="directory where stashes are stored")
@click.option("--verbose", "-v", is_flag=True, help="enable debug logging")
@click.pass_context
def cli(ctx, home, verbose):
    """Stash directory trees by name and expand them back."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = os.path.abspath(os.path.expanduser(home))


@cli.command()
@click.option("--stash-name", "-n", required=True, help=NAME_HELP)
@click.option("--stash-content", "-c",
              default=".",
              type=click.Path(file_okay=False),
              help="the directory that its content will be used to create the stash")
@click.pass_obj
@handle_errors
def create(home, stash_name, stash_content):
    """creating stash based on the content of a directory"""
    with open_stash(home) as stash:
        stash.create(stash_name, os.path.abspath(stash_content))


@cli.command()
@click.option("--stash-name", "-n", required=True, help=NAME_HELP)
@click.option("--destination", "-d",
              default=".",
              type=click.Path(file_okay=False),
              help="the directory that its content will be expanded to")
@click.argument("data", nargs=-1)
@click.pass_obj
@handle_errors
def expand(home, stash_name, destination, data):
    """expand stash into a directory, DATA is FILE=JSON template data"""
    template_data = parse_template_data(data)
    with open_stash(home) as stash:
        stash.expand(stash_name, os.path.abspath(destination), template_data)


@cli.command()
@click.option("--stash-name", "-n", required=True, help=NAME_HELP)
@click.option("--destination", "-d",
              default=".",
              type=click.Path(file_okay=False),
              help="the directory that its content will be expanded to")
@click.pass_obj
@handle_errors
def pop(home, stash_name, destination):
    """copy stash into a directory without rendering templates"""
    with open_stash(home) as stash:
        stash.pop(stash_name, os.path.abspath(destination))


@cli.command()
@click.option("--stash-name", "-n", required=True, help=NAME_HELP)
@click.pass_obj
@handle_errors
def delete(home, stash_name):
    """delete a stash"""
    with open_stash(home) as stash:
        stash.delete(stash_name)


@cli.command("list")
@click.pass_obj
@handle_errors
def list_(home):
    """lists existing file stashes"""
    with open_stash(home) as stash:
        names = sorted(stash.list())
    click.echo(" ".join(names))


def main():
    cli(prog_name="fstash")


if __name__ == "__main__":
    main()
