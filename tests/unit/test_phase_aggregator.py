"""
Testes para PhaseAggregator.
"""

import pytest

from tobe_analytics.analysis import PhaseAggregator, PhaseClassifier, aggregate_phases
from tobe_analytics.config import DEFAULT_PHASE_TABLE


def _by_phase(rows):
    return {row.phase: row for row in rows}


class TestPhaseAggregator:
    """Testes da agregação por fase."""

    def test_enumerates_all_configured_phases(self):
        rows = aggregate_phases([], [])

        assert [r.phase for r in rows] == list(DEFAULT_PHASE_TABLE.phases)
        assert all(r.asis_avg_min == 0 and r.tobe_avg_min == 0 for r in rows)

    def test_phase_missing_in_redesign_is_zero(self, make_event):
        """Design só no As-Is ainda gera linha com tobe = 0."""
        asis = [make_event(step="CATIA", minute=0, duration=600)]
        tobe = [make_event(step="EBOM", minute=0, duration=60)]

        design = _by_phase(aggregate_phases(asis, tobe))["Design"]

        assert design.asis_avg_min == pytest.approx(10.0)
        assert design.tobe_avg_min == 0
        assert design.tobe_events == 0

    def test_average_not_total(self, make_event):
        """A métrica principal é média por evento; o total fica ao lado."""
        asis = [
            make_event(step="CATIA", minute=0, duration=120),
            make_event(step="CATIA", minute=2, duration=360),
        ]

        design = _by_phase(aggregate_phases(asis, []))["Design"]

        assert design.asis_avg_min == pytest.approx(4.0)
        assert design.asis_total_min == pytest.approx(8.0)
        assert design.asis_events == 2

    def test_missing_duration_counts_as_zero(self, make_event):
        asis = [
            make_event(step="REVIEW", minute=0, duration=600),
            make_event(step="REVIEW", minute=10, duration=None),
        ]

        verification = _by_phase(aggregate_phases(asis, []))["Verification"]

        assert verification.asis_avg_min == pytest.approx(5.0)
        assert verification.asis_events == 2

    def test_fallback_classification(self, make_event):
        tobe = [make_event(step="misc", action="Data Import Job", duration=300)]

        integration = _by_phase(aggregate_phases([], tobe))["Integration"]

        assert integration.tobe_avg_min == pytest.approx(5.0)

    def test_delta_and_color(self, make_event):
        asis = [make_event(step="CATIA", duration=600)]
        tobe = [make_event(step="CATIA", duration=240)]

        design = _by_phase(PhaseAggregator(PhaseClassifier()).aggregate(asis, tobe))["Design"]

        assert design.delta_min == pytest.approx(-6.0)
        assert design.color == "#F59E0B"
        assert design.to_dict()["asisMin"] == pytest.approx(10.0)
        assert design.to_dict()["tobeMin"] == pytest.approx(4.0)

    def test_deterministic(self, make_event):
        asis = [make_event(step="CATIA", duration=60), make_event(step="LOGIN", duration=30)]

        assert aggregate_phases(asis, []) == aggregate_phases(asis, [])
