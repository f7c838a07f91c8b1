"""
Tests for the decision tree core.

Test organization:
- test_types.py: NodeType, NodeData and NodeUpdate records
- test_nodes.py: Node variants and their recursive edits
- test_tree.py: Tree editing API and id assignment
- test_validity.py: Probability distribution checks
- test_expected_value.py: Backward induction and optimal branches
- test_examples.py: Bundled example trees
"""
