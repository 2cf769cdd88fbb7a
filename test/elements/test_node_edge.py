from fcalattice.elements import Edge, Node, item_key, sorted_items


def test_identifiers_are_unique_and_increasing():
    first, second = Node(), Node()
    assert first.identifier < second.identifier
    assert first != second


def test_equality_is_by_identity_not_content():
    a, b = Node("x"), Node("x")
    assert a != b
    assert a == a
    assert len({a, b, a}) == 2


def test_content_is_mutable():
    node = Node("before")
    node.content = "after"
    assert str(node) == "after"


def test_node_without_content_prints_identifier():
    node = Node()
    assert str(node) == str(node.identifier)


def test_numeric_contents_order_before_strings():
    three, one, word = Node(3), Node(1), Node("a")
    assert sorted([word, three, one]) == [one, three, word]


def test_incomparable_contents_order_by_identifier():
    first, second = Node(frozenset({1})), Node(None)
    assert sorted([second, first]) == [first, second]


def test_equal_contents_break_ties_by_identifier():
    first, second = Node("same"), Node("same")
    assert sorted([second, first]) == [first, second]


def test_edge_identity_ignores_content():
    source, target = Node("s"), Node("t")
    assert Edge(source, target, "x") == Edge(source, target, "y")
    assert hash(Edge(source, target, "x")) == hash(Edge(source, target))
    assert Edge(source, target) != Edge(target, source)


def test_edge_rendering():
    source, target = Node("Hello"), Node("World")
    assert str(Edge(source, target, "happy")) == "[Hello]-(happy)->[World]"
    assert str(Edge(source, target)) == "[Hello]->[World]"
    assert not Edge(source, target).has_content()


def test_edges_order_by_source_then_target():
    a, b, c = Node(1), Node(2), Node(3)
    edges = [Edge(b, a), Edge(a, c), Edge(a, b)]
    assert sorted(edges) == [Edge(a, b), Edge(a, c), Edge(b, a)]


def test_item_key_orders_mixed_items():
    node = Node("n")
    items = [frozenset({2}), "b", node, 1, frozenset(), "a"]
    assert sorted_items(items) == [1, "a", "b", node, frozenset(), frozenset({2})]


def test_item_key_orders_sets_by_size_then_members():
    assert item_key(frozenset({3})) < item_key(frozenset({1, 2}))
    assert item_key(frozenset({1, 2})) < item_key(frozenset({1, 3}))
