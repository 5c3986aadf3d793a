"""Tests untuk kalkulasi skor disiplin."""

import pytest

from src.models.pegawai import DisciplineScore
from src.utils.discipline_calculator import discipline_calculator


@pytest.mark.parametrize(
    "components, expected",
    [
        ((100, 100, 100, 100), 100.0),
        ((0, 0, 0, 0), 0.0),
        ((80, 0, 0, 0), 20.0),
        ((90, 80, 70, 60), 72.5),
    ],
)
def test_final_score(components, expected):
    assert discipline_calculator.calculate_final(*components) == pytest.approx(expected)


def test_out_of_range_inputs_pass_through():
    assert discipline_calculator.calculate_final(200, 0, 0, 0) == pytest.approx(50.0)
    assert discipline_calculator.calculate_final(-40, 0, 0, 0) == pytest.approx(-10.0)


@pytest.mark.parametrize(
    "final, category",
    [
        (95, "Sangat Baik (>90%)"),
        (90, "Baik (75-90%)"),
        (75, "Baik (75-90%)"),
        (60, "Cukup (60-75%)"),
        (59.9, "Kurang (<60%)"),
    ],
)
def test_rating_boundaries(final, category):
    assert discipline_calculator.rate(final) == category


def test_distribution_drops_empty_categories():
    assert discipline_calculator.distribution([100, 95, 20]) == {
        "Sangat Baik (>90%)": 2,
        "Kurang (<60%)": 1,
    }


def test_score_model_recomputes_final():
    score = DisciplineScore(attendance=80)
    assert score.final == pytest.approx(20.0)
    score.report = 100
    assert score.final == pytest.approx(60.0)
    assert score.model_dump()["final"] == pytest.approx(60.0)
    assert DisciplineScore().final == 0.0
