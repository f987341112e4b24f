from typing import Any, List

from custom_amsthm.dyn_dispatch import DynDispatch

from . import pandoc_types as pan

Visitors = DynDispatch[[], Any]
"""Maps pandoc node types to functions returning their replacement.
A visitor may return a list to splice several nodes in place of one."""


class DocumentDfsPass:
    """
    A single bottom-up traversal over the blocks of a pandoc document.

    Children are visited before their parents, and siblings in document order,
    the same order pandoc applies its own filters in.
    Each filter stage is its own pass, so a later pass sees every change made by an earlier one.
    """

    visitors: Visitors

    def __init__(self, visitors: Visitors) -> None:
        self.visitors = visitors

    def dfs_over_document(self, doc: pan.Pandoc) -> pan.Pandoc:
        doc[1] = self.walk_list(doc[1])
        return doc

    def walk_list(self, nodes: List[Any]) -> List[Any]:
        walked: List[Any] = []
        for node in nodes:
            replacement = self.walk(node)
            # Splice in a list that replaced a single node, keep nested lists (e.g. list items) nested
            if isinstance(replacement, list) and not isinstance(node, list):
                walked.extend(replacement)
            else:
                walked.append(replacement)
        return walked

    def walk(self, node: Any) -> Any:
        if node is None or isinstance(node, (str, bool, int, float)):
            return node
        if isinstance(node, list):
            return self.walk_list(node)
        if isinstance(node, tuple):
            return tuple(self.walk(child) for child in node)
        if isinstance(node, dict):
            return {key: self.walk(value) for key, value in node.items()}

        # A pandoc node - rebuild its children in place, then visit the node itself.
        for i, child in enumerate(node):
            node[i] = self.walk(child)
        visitor = self.visitors.get_handler(node)
        if visitor is None:
            return node
        return visitor(node)
