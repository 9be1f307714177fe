from pathlib import Path

import networkx as nx
import pytest

from ordtree import Direction, OrderedTree


def pytest_addoption(parser):
    parser.addoption("--benchmark", action="store_true", default=False, help="run benchmark tests")


def pytest_configure(config):
    config.addinivalue_line("markers", "benchmark: mark benchmark tests")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--benchmark"):
        return
    benchmark_skip_marker = pytest.mark.skip(reason="use --benchmark marker to run")
    for item in items:
        filename = Path(str(item.fspath)).name
        if "benchmark" in item.keywords or filename.startswith('test_benchmark'):
            item.add_marker(benchmark_skip_marker)


def as_graph(tree: OrderedTree) -> nx.DiGraph:
    """Builds a parent -> child graph of the tree's nodes

    Each edge carries the slot the child occupies as its `direction`
    attribute. Child back-links are checked along the way.
    """
    graph = nx.DiGraph()
    if tree.root is None:
        return graph

    graph.add_node(tree.root)
    stack = [tree.root]
    while stack:
        node = stack.pop()
        for direction in (Direction.LEFT, Direction.RIGHT):
            child = node.get_child(direction)
            if child is None:
                continue
            assert child.parent is node
            assert child.get_direction() == direction
            graph.add_edge(node, child, direction=direction)
            stack.append(child)
    return graph


@pytest.fixture
def check_structure():
    def check(tree: OrderedTree, strict=True):
        graph = as_graph(tree)
        assert len(graph) == len(tree)
        if tree.root is None:
            return graph

        assert tree.root.parent is None
        assert tree.root.get_direction() == Direction.ROOT
        assert nx.is_arborescence(graph)

        # every key below a left edge is smaller, every key below a right
        # edge is larger (or equal, when duplicates are allowed)
        for parent, child, direction in graph.edges(data="direction"):
            subtree = nx.descendants(graph, child) | {child}
            for node in subtree:
                if direction == Direction.LEFT:
                    assert node.key < parent.key
                elif strict:
                    assert node.key > parent.key
                else:
                    assert node.key >= parent.key
        return graph
    return check
