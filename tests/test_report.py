"""Tests for the analysis report."""

import pandas as pd

import hassechain
from hassechain.datasets import linear_with_shortcut, symmetric_pair, transient_into_absorbing, two_cycle_with_absorbing
from hassechain.report import format_report


def _report(df):
    with hassechain.load(df) as chain:
        return chain.analyze()


class TestFormatReport:

    def test_five_state_chain(self, loaded_chain):
        text = format_report(loaded_chain.analyze())
        assert "Strongly connected classes:" in text
        assert "  C1: {2, 3}" in text
        assert "  C2 -> C1" in text
        assert "  C1 is persistent" in text
        assert "  C2 is transient" in text
        assert "No absorbing states." in text
        assert "The chain is not irreducible." in text
        assert "converged after" in text
        assert "  C3: 1 (aperiodic)" in text
        assert "Warning" not in text

    def test_closed_classes(self):
        text = format_report(_report(two_cycle_with_absorbing()))
        assert "Links between classes: none (every class is closed)" in text
        assert "  state 3 (class C2)" in text
        assert "  C1: 2" in text
        assert "no convergence after 100 iterations" in text

    def test_absorbing_state_named(self):
        text = format_report(_report(transient_into_absorbing()))
        assert "Absorbing states:" in text
        assert "  state 2 (class C1)" in text
        assert "  C1 [2: 1.0000]" in text

    def test_irreducible(self):
        assert "The chain is irreducible." in format_report(_report(symmetric_pair()))

    def test_hasse_block(self):
        text = format_report(_report(linear_with_shortcut()))
        hasse = text.split("Hasse diagram links:")[1].split("Class properties:")[0]
        assert hasse.split() == ["C3", "->", "C2", "C2", "->", "C1"]

    def test_not_markov_warning(self):
        df = pd.DataFrame({"source": [1, 2], "target": [2, 2], "probability": [0.5, 1.0]})
        text = format_report(_report(df))
        assert "Warning: not a Markov graph" in text
        assert "vertex 1 sums to 0.5000" in text


class TestChainReport:

    def test_to_dict(self):
        d = _report(two_cycle_with_absorbing()).to_dict()
        assert d["classes"] == {"C1": [1, 2], "C2": [3]}
        assert d["links"] == []
        assert d["persistent"] == {"C1": True, "C2": True}
        assert d["absorbing_states"] == [3]
        assert d["is_irreducible"] is False
        assert d["periods"] == {"C1": 2, "C2": 1}
        assert d["stationary"]["C2"]["converged"] is True

    def test_is_markov(self):
        assert _report(symmetric_pair()).is_markov
