"""
Property-based tests for the class context classifier using Hypothesis.

These tests build random ancestor chains and compare the shape-match
classifier with the ancestry walk and with the expected member shapes.
"""

from hypothesis import given, strategies as st

from psstyle.core.classifier import CLASS_MEMBER_SHAPES, is_in_class, is_in_class_by_ancestry
from psstyle.core.syntax import NodeKind, SyntaxNode

kinds = st.sampled_from(list(NodeKind))
leaf_kinds = st.sampled_from([NodeKind.PARAMETER, NodeKind.NAMED_ARGUMENT])


@st.composite
def node_chain(draw):
    """Generate a root-first chain of nodes ending in a parameter or named argument."""
    ancestors = draw(st.lists(st.tuples(kinds, st.booleans()), min_size=0, max_size=8))
    nodes = []
    for kind, is_class_type in ancestors:
        node = SyntaxNode(kind, is_class_type=is_class_type)
        if nodes:
            nodes[-1].add_child(node)
        nodes.append(node)

    leaf = SyntaxNode(draw(leaf_kinds))
    if nodes:
        nodes[-1].add_child(leaf)
    nodes.append(leaf)
    return nodes


class TestClassifierProperties:
    """Property-based tests for is_in_class."""

    @given(node_chain())
    def test_shape_match_implies_ancestry(self, nodes):
        """Property: anything in a class by shape is also in a class by ancestry."""
        leaf = nodes[-1]

        if is_in_class(leaf):
            assert is_in_class_by_ancestry(leaf)

    @given(node_chain())
    def test_shape_match_only_looks_three_levels_up(self, nodes):
        """Property: the result is decided by the three nearest ancestors."""
        leaf = nodes[-1]
        nearest = list(reversed(nodes[:-1]))[:3]
        shape = CLASS_MEMBER_SHAPES[leaf.kind]

        expected = (
            len(nearest) == 3
            and tuple(n.kind for n in nearest) == shape
            and nearest[-1].is_class_type
        )

        assert is_in_class(leaf) is expected

    @given(node_chain())
    def test_ancestry_finds_any_class(self, nodes):
        """Property: the ancestry walk is true iff some ancestor is a class definition."""
        leaf = nodes[-1]
        expected = any(
            n.kind == NodeKind.TYPE_DEFINITION and n.is_class_type for n in nodes[:-1]
        )

        assert is_in_class_by_ancestry(leaf) is expected

    @given(kinds.filter(lambda k: k not in CLASS_MEMBER_SHAPES), st.booleans())
    def test_other_kinds_are_never_in_class(self, kind, is_class_type):
        """Property: kinds other than parameters and named arguments give False."""
        root = SyntaxNode(NodeKind.TYPE_DEFINITION, is_class_type=True)
        member = root.add_child(SyntaxNode(NodeKind.FUNCTION_MEMBER))
        definition = member.add_child(SyntaxNode(NodeKind.FUNCTION_DEFINITION))
        node = definition.add_child(SyntaxNode(kind, is_class_type=is_class_type))

        assert is_in_class(node) is False
