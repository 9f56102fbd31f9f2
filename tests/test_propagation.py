"""Tests for node and arc consistency filtering."""

import random
from datetime import date

from calendar_solver.csp.constraints import (
    BinaryDateConstraint,
    Operator,
    UnaryDateConstraint,
    binary,
    canonical_order,
    unary,
)
from calendar_solver.csp.domains import DomainStore
from calendar_solver.csp.oracle import reverse_operator, satisfies
from calendar_solver.csp.propagation import (
    arc_consistency,
    node_consistency,
    propagate,
    revise,
)

from .conftest import make_days

D = make_days(5)


def _store(n, n_days=5):
    return DomainStore.initialize(n, D[0], D[n_days - 1])


def _random_constraints(rng, n, n_days):
    out = []
    for _ in range(rng.randint(0, 5)):
        op = rng.choice(list(Operator))
        if rng.random() < 0.4:
            out.append(unary(rng.randrange(n), op, D[rng.randrange(n_days)]))
        else:
            out.append(binary(rng.randrange(n), op, rng.randrange(n)))
    return canonical_order(out)


def _assert_node_consistent(store, constraints):
    for c in constraints:
        if isinstance(c, UnaryDateConstraint):
            for d in store.get(c.left):
                assert satisfies(d, c.value, c.op)


def _assert_arc_consistent(store, constraints):
    for c in constraints:
        if not isinstance(c, BinaryDateConstraint):
            continue
        if c.left == c.right:
            assert all(satisfies(d, d, c.op) for d in store.get(c.left))
            continue
        for t in store.get(c.left):
            assert any(satisfies(t, h, c.op) for h in store.get(c.right))
        for t in store.get(c.right):
            assert any(satisfies(t, h, reverse_operator(c.op)) for h in store.get(c.left))


def test_node_consistency_applies_unary_constraints():
    store = _store(2)
    removed = node_consistency(store, [unary(0, ">=", D[2]), unary(0, "!=", D[3])])
    assert removed == 3
    assert store.get(0) == [D[2], D[4]]
    assert store.get(1) == D


def test_node_consistency_ignores_binary_constraints():
    store = _store(2)
    assert node_consistency(store, [binary(0, "<", 1)]) == 0
    assert store.get(0) == D


def test_node_consistency_is_order_independent():
    cs = [unary(0, ">", D[0]), unary(0, "<", D[4]), unary(0, "!=", D[2])]
    a, b = _store(1), _store(1)
    node_consistency(a, cs)
    node_consistency(b, list(reversed(cs)))
    assert a.get(0) == b.get(0) == [D[1], D[3]]


def test_revise_removes_unsupported_tail_values():
    store = _store(2)
    assert revise(store, 0, 1, Operator.LT) is True
    assert store.get(0) == D[:4]
    assert revise(store, 0, 1, Operator.LT) is False


def test_arc_consistency_prunes_both_directions():
    store = _store(2, n_days=3)
    arc_consistency(store, [binary(0, "<", 1)])
    assert store.get(0) == [D[0], D[1]]
    assert store.get(1) == [D[1], D[2]]


def test_reverse_arc_uses_reversed_operator():
    # #0 > #1 で、#0 のドメインが D[3] だけなら #1 は D[3] より前だけが残る
    store = _store(2)
    store.restrict(0, [D[3]])
    arc_consistency(store, [binary(0, ">", 1)])
    assert store.get(0) == [D[3]]
    assert store.get(1) == [D[0], D[1], D[2]]


def test_arc_consistency_equality_intersects_domains():
    store = _store(2)
    store.restrict(0, [D[0], D[1], D[2]])
    store.restrict(1, [D[2], D[3], D[4]])
    arc_consistency(store, [binary(0, "==", 1)])
    assert store.get(0) == [D[2]]
    assert store.get(1) == [D[2]]


def test_self_referencing_constraint_filters_per_value():
    store = _store(1)
    arc_consistency(store, [binary(0, "<=", 0)])
    assert store.get(0) == D

    arc_consistency(store, [binary(0, "!=", 0)])
    assert store.get(0) == []


def test_single_pass_can_miss_chained_pruning():
    cs = canonical_order([binary(0, "<", 1), binary(1, "<", 2)])

    single = _store(3, n_days=3)
    arc_consistency(single, cs, until_fixed_point=False)
    assert single.get(0) == [D[0], D[1]]

    fixed = _store(3, n_days=3)
    arc_consistency(fixed, cs, until_fixed_point=True)
    assert fixed.get(0) == [D[0]]
    assert fixed.get(1) == [D[1]]
    assert fixed.get(2) == [D[2]]


def test_propagate_reports_wipe_out():
    store = _store(2, n_days=2)
    ok = propagate(store, [binary(0, "<", 1), binary(1, "<", 0)])
    assert ok is False
    assert store.has_empty_domain()


def test_propagate_runs_node_before_arc():
    store = _store(2)
    ok = propagate(store, [unary(1, "<=", D[1]), binary(0, ">", 1)])
    assert ok is True
    assert store.get(1) == [D[0], D[1]]
    assert store.get(0) == [D[1], D[2], D[3], D[4]]


def test_filtering_invariants_and_idempotence_on_random_instances():
    rng = random.Random(7)
    for _ in range(200):
        n = rng.randint(1, 4)
        n_days = rng.randint(1, 5)
        cs = _random_constraints(rng, n, n_days)

        store = _store(n, n_days)
        initial = {v: list(store.get(v)) for v in store}
        propagate(store, cs)

        # 単調性: フィルタ後のドメインは初期ドメインの部分集合
        for v in store:
            assert set(store.get(v)) <= set(initial[v])

        if not store.has_empty_domain():
            _assert_node_consistent(store, cs)
            _assert_arc_consistent(store, cs)

        # 冪等性: もう一度かけても変わらない
        before = store.copy()
        propagate(store, cs)
        assert store.domains == before.domains
