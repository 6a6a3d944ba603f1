# Per-file analysis context: store file path, source text, and syntax tree.
# Handles reading .cs files, turning unreadable files into AcquisitionError,
# and logging node/method counts so trees are ready for rules.

import logging
from pathlib import Path
from typing import Optional, Union

from tree_sitter import Parser

from sharplint.errors import AcquisitionError, ParseError
from sharplint.parser import create_parser, parse
from sharplint.syntax import NodeKind, SyntaxTree

logger = logging.getLogger(__name__)


def count_tree_stats(tree: SyntaxTree) -> tuple[int, int]:
    """
    Return (total node count, method declaration count) for the tree.

    Useful for logging how much was parsed (nodes and methods).
    """
    nodes = 1
    methods = 0
    for node in tree.descendants():
        nodes += 1
        if node.kind is NodeKind.METHOD_DECLARATION:
            methods += 1
    return nodes, methods


class FileContext:
    """
    Per-file state for analysis: path, source text, and syntax tree.

    Built by create_context(); the engine only needs context.tree.
    """

    def __init__(self, path: Path, text: str, tree: SyntaxTree) -> None:
        self.path = path
        self.text = text
        self.tree = tree


def read_source(path: Union[Path, str, None]) -> str:
    """
    Read a C# file as UTF-8 text (a leading BOM is dropped).

    Raises:
        AcquisitionError: The path is empty, missing, not a regular file,
            unreadable, or not valid UTF-8.
    """
    if path is None or str(path).strip() == "":
        raise AcquisitionError(None, "Invalid filepath")
    path = Path(path)
    try:
        raw = path.read_bytes()
    except IsADirectoryError as e:
        logger.error("Failed to read file %s: %s", path, e)
        raise AcquisitionError(path, "is a directory, not a file") from e
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        raise AcquisitionError(path, e.strerror or str(e)) from e
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error("File %s is not valid UTF-8: %s", path, e)
        raise AcquisitionError(path, "not valid UTF-8 text") from e


def create_context(
    path: Union[Path, str],
    parser: Optional[Parser] = None,
) -> FileContext:
    """
    Read a C# file and parse it into a FileContext (path, text, tree).

    - Unreadable file (permission, missing, bad encoding): AcquisitionError.
    - Malformed C# (syntax errors): ParseError, raised before any rule runs.
    - Success: returns FileContext and logs node count and method count.
    """
    if parser is None:
        parser = create_parser()

    text = read_source(path)
    path = Path(path)
    try:
        tree = parse(text, parser=parser)
    except ParseError:
        logger.warning("File %s could not be parsed; no analysis performed", path)
        raise

    node_count, method_count = count_tree_stats(tree)
    logger.info(
        "Parsed %s: %d nodes, %d method(s)",
        path,
        node_count,
        method_count,
    )
    return FileContext(path=path, text=text, tree=tree)
