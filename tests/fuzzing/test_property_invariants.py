"""
Property-based tests for indexation and the relationship graph.

Generates arbitrary graphs (cycles included) and arbitrary index
movements to check the invariants that must hold for every input.
"""

from datetime import date
from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from property_config.builder import RelationshipGraphBuilder
from property_config.schema import EdgeKind, EntityDescriptor, RelationshipGraph
from property_engines.indexation import IndexationCalculator
from property_kernel.domain.base_parameters import BaseParameters
from property_kernel.domain.contracts import (
    Contract,
    IndexationPolicy,
    IndexDetails,
    Payment,
)
from property_kernel.services.base_parameters_service import InMemoryBaseParametersSource

KINDS = ["a", "b", "c", "d", "e"]

amounts = st.decimals(min_value=Decimal("0"), max_value=Decimal("100000"), places=2)
index_values = st.decimals(min_value=Decimal("0.01"), max_value=Decimal("1000"), places=2)
kinds = st.sampled_from(["consumer_price_index", "dollar", "custom", "none", "gold"])


@st.composite
def graphs(draw):
    entities = {}
    for kind in draw(st.lists(st.sampled_from(KINDS), min_size=1, unique=True)):
        entities[kind] = EntityDescriptor(
            inherits_from=tuple(draw(st.lists(st.sampled_from(KINDS), max_size=3, unique=True))),
            attributes=tuple(draw(st.lists(st.sampled_from(["x", "y", "z", "w"]), max_size=3))),
        )
    return RelationshipGraph(entities)


class TestIndexationInvariants:
    @given(amount=amounts, base=index_values, current=index_values, kind=kinds)
    @settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_paid_index_always_zero(self, amount, base, current, kind):
        source = InMemoryBaseParametersSource([
            BaseParameters(consumer_price_index=current, currency_rates={"usd": current}, is_active=True)
        ])
        contract = Contract(
            start_date=date(2020, 1, 1),
            indexation=IndexationPolicy(kind=kind, base_index=base, custom_rate=Decimal("0.05")),
        )
        payment = Payment(
            date=date(2024, 6, 1),
            amount=amount,
            index_details=IndexDetails(is_index_paid=True),
        )

        assert IndexationCalculator(source).compute_index_adjustment(payment, contract) == 0

    @given(amount=amounts, base=index_values, current=index_values)
    @settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_cpi_adjustment_sign_follows_index(self, amount, base, current):
        source = InMemoryBaseParametersSource([
            BaseParameters(consumer_price_index=current, currency_rates={"usd": current}, is_active=True)
        ])
        contract = Contract(
            start_date=date(2020, 1, 1),
            indexation=IndexationPolicy(kind="consumer_price_index", base_index=base),
        )
        result = IndexationCalculator(source).compute_index_adjustment(
            Payment(date=date(2024, 6, 1), amount=amount), contract
        )

        if current >= base:
            assert result >= 0
        else:
            assert result <= 0
        assert result.as_tuple().exponent == -2


class TestGraphInvariants:
    @given(graph=graphs(), kind=st.sampled_from(KINDS))
    @settings(max_examples=200, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_collection_closed_under_parents(self, graph, kind):
        collected = graph.collect_inherited_attributes(kind)
        entity = graph.get(kind)
        if entity is None:
            assert collected == frozenset()
            return
        for parent_kind in entity.inherits_from:
            parent = graph.get(parent_kind)
            if parent is None:
                continue
            assert set(parent.attributes) <= collected
            assert graph.collect_inherited_attributes(parent_kind) <= collected

    @given(graph=graphs(), kind=st.sampled_from(KINDS))
    @settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_collection_idempotent(self, graph, kind):
        assert graph.collect_inherited_attributes(kind) == graph.collect_inherited_attributes(kind)

    @given(
        graph=graphs(),
        source=st.sampled_from(KINDS),
        target=st.sampled_from(KINDS),
        edge_kind=st.sampled_from(["inheritsFrom", "inheritsTo", "relatedTo"]),
        repeats=st.integers(min_value=1, max_value=4),
    )
    @settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_registration_idempotent_for_edges(self, graph, source, target, edge_kind, repeats):
        builder = RelationshipGraphBuilder(graph)
        for _ in range(repeats):
            builder.register_relationship(source, target, edge_kind)
        built = builder.build()

        edges = built.get(source).edges(EdgeKind(edge_kind))
        assert edges.count(target) == 1
        assert built.are_related(source, target)
