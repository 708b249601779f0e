"""Turn org-mode outline text into a tree of HeadingNodes.

orgparse does the actual parsing. It is lenient to a fault: an unterminated
block or property drawer silently swallows the rest of the section. We check
for those first so a broken document fails loudly instead of producing a tree
with missing snippets.
"""

import re

import orgparse
from orgparse.node import OrgEnv, OrgNode

from snippad.errors import ParseError
from snippad.models.snippet import HeadingNode

_HEADING = re.compile(r"^\*+ ")
_BLOCK_BEGIN = re.compile(r"^\s*#\+begin_(\S+)", re.IGNORECASE)
_BLOCK_END = re.compile(r"^\s*#\+end_(\S+)", re.IGNORECASE)
_DRAWER_BEGIN = re.compile(r"^\s*:PROPERTIES:\s*$")
_DRAWER_END = re.compile(r"^\s*:END:\s*$")


def check_structure(text: str, *, source: str = "<string>") -> None:
    """Raise ParseError for blocks or drawers that are never closed.

    A block or drawer must be closed before the next heading, as in org-mode.
    """
    open_block: tuple[str, int] | None = None
    open_drawer: int | None = None

    for lineno, line in enumerate(text.split("\n"), start=1):
        if _HEADING.match(line):
            if open_block is not None:
                name, start = open_block
                raise ParseError(f"unterminated #+BEGIN_{name} block", source=source, line=start)
            if open_drawer is not None:
                raise ParseError("unterminated :PROPERTIES: drawer", source=source, line=open_drawer)
            continue

        if open_block is not None:
            m = _BLOCK_END.match(line)
            if m and m.group(1).lower() == open_block[0].lower():
                open_block = None
            continue

        if open_drawer is not None:
            if _DRAWER_END.match(line):
                open_drawer = None
            continue

        m = _BLOCK_BEGIN.match(line)
        if m:
            open_block = (m.group(1), lineno)
        elif _DRAWER_BEGIN.match(line):
            open_drawer = lineno

    if open_block is not None:
        name, start = open_block
        raise ParseError(f"unterminated #+BEGIN_{name} block", source=source, line=start)
    if open_drawer is not None:
        raise ParseError("unterminated :PROPERTIES: drawer", source=source, line=open_drawer)


def _convert(org_node: OrgNode) -> HeadingNode:
    node = HeadingNode(
        level=org_node.level,
        title=org_node.get_heading(format="raw"),
        body=org_node.get_body(format="raw"),
    )
    for child in org_node.children:
        node.add_child(_convert(child))
    return node


def parse_outline(text: str, *, source: str = "<string>") -> HeadingNode:
    """Parse outline text and return the root HeadingNode (level 0).

    Heading titles are taken verbatim: TODO keywords are not interpreted, and
    link markup in titles and bodies is left as written.

    Raises:
        ParseError: The text cannot be turned into a heading tree.
    """
    check_structure(text, source=source)

    # No TODO keywords, so "TODO Foo" stays a literal title.
    env = OrgEnv(todos=[], dones=[], filename=source)
    try:
        org_root = orgparse.loads(text, filename=source, env=env)
        root = HeadingNode(level=0, title="")
        for child in org_root.children:
            root.add_child(_convert(child))
    except Exception as e:
        raise ParseError(f"cannot parse outline: {e}", source=source) from e

    return root
