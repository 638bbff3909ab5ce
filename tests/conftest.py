"""Shared fixtures for the prefer-bind test suite.

Source snippets are parsed with the real tree-sitter grammars; nothing
about the tree is mocked.
"""

import logging
from pathlib import Path

import pytest

from prefer_bind.core.logging import PACKAGE_LOGGER
from prefer_bind.patchgen.generator import apply_suggestions
from prefer_bind.rule.matcher import CLOSURE_NODE_TYPES
from prefer_bind.rule.prefer_bind import PreferBindRule
from prefer_bind.scanner.ast_scanner import parse_source, scan_ast

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

# Report closures wherever they are, to exercise shapes without context.
ANYWHERE = {"onlyInLongLivedContexts": False}


def _find_nodes(node, types):
    if node.type in types:
        yield node
    for child in node.children:
        yield from _find_nodes(child, types)


@pytest.fixture
def lint():
    """Run the rule over a snippet and return its findings."""

    def _lint(code, options=None, path="test.js"):
        return scan_ast(Path(path), code, PreferBindRule(options))

    return _lint


@pytest.fixture
def outputs(lint):
    """Source after applying each finding's suggestion on its own."""

    def _outputs(code, options=None, path="test.js"):
        return [apply_suggestions(code, [f])[0] for f in lint(code, options, path)]

    return _outputs


@pytest.fixture
def closure():
    """First closure node (arrow function or function expression) in a snippet."""

    def _closure(code, path="test.js"):
        tree = parse_source(Path(path), code)
        return next(_find_nodes(tree.root_node, CLOSURE_NODE_TYPES))

    return _closure


@pytest.fixture
def find_node():
    """First node of the given type in a snippet."""

    def _find(code, node_type, path="test.js"):
        tree = parse_source(Path(path), code)
        return next(_find_nodes(tree.root_node, (node_type,)))

    return _find


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
