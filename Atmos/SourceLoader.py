# SourceLoader.py
"""""
Loads the atmospherics constants from the game's C# source.

Every `public const <type> <Name> = <definition>;` becomes one entry
Name -> definition. The definition is kept as text (it is often an
expression over other constants); SymbolExpander deals with it later.
"""""

import re

import requests

from . import error as E

CONST_PATTERN = re.compile(r"public const (\w+) (\w+) = ([^;]+);")


def parse_constants(text):
    constants = {}
    for match in CONST_PATTERN.finditer(text):
        # Definitions may span several lines in the source
        constants[match.group(2)] = " ".join(match.group(3).split())

    if not constants:
        raise E.LoaderError("No constants found in source.", code="6002")
    return constants


def fetch_text(url, timeout=10):
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise E.LoaderError(f"Could not fetch {url}: {e}", code="6001", equation=url)
    return response.text


def fetch_constants(url, timeout=10):
    return parse_constants(fetch_text(url, timeout))


def reload_constants(table, url, timeout=10):
    """Replace the table's constants with a fresh download.

    On any error the table keeps its current constants and the LoaderError
    propagates to the caller.
    """
    constants = fetch_constants(url, timeout)
    table.replace_constants(constants)
    return len(constants)
