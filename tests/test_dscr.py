"""Tests for debt service and DSCR stress."""

import pytest
from fair_simulator.finance.dscr import cfads, compute_dscr_stress, debt_service, dscr
from fair_simulator.config.company import CompanyProfile
from fair_simulator.config.finance import FinanceConfig


class TestDebtService:
    def test_amortizing(self):
        # 100 × 6% + 100 / 5
        assert debt_service(100, 0.06, 5) == pytest.approx(26.0)

    def test_interest_only_when_no_term(self):
        assert debt_service(100, 0.06, 0) == pytest.approx(6.0)

    def test_no_debt(self):
        assert debt_service(0, 0.06, 5) == 0


class TestDSCR:
    def test_cfads(self):
        assert cfads(100, 20, 10, 5) == 75

    def test_ratio(self):
        assert dscr(52, 100, 0.06, 5) == pytest.approx(2.0)

    def test_zero_when_no_debt_service(self):
        assert dscr(50, 0, 0.06, 5) == 0.0


class TestDSCRStress:
    def test_default_profile_pre_event(self):
        result = compute_dscr_stress(CompanyProfile(), FinanceConfig(), 0.0)
        # EBITDA 119; CFADS = 119 − 29.75 − 25.5; DS = 16.25 + 25
        assert result.ebitda == pytest.approx(119.0)
        assert result.cfads_pre_event == pytest.approx(63.75)
        assert result.debt_service == pytest.approx(41.25)
        assert result.dscr_pre_event == pytest.approx(1.5455, abs=1e-4)
        assert result.dscr_post_event == result.dscr_pre_event
        assert not result.covenant_breach

    def test_loss_flows_through_to_cfads(self):
        result = compute_dscr_stress(CompanyProfile(), FinanceConfig(), 2.5)
        assert result.cfads_post_event == pytest.approx(61.25)
        assert result.dscr_post_event < result.dscr_pre_event
        assert not result.covenant_breach

    def test_large_loss_breaches_covenant(self):
        result = compute_dscr_stress(CompanyProfile(), FinanceConfig(), 20.0)
        assert result.dscr_post_event == pytest.approx(43.75 / 41.25, abs=1e-4)
        assert result.covenant_breach

    def test_ebitda_floor(self):
        result = compute_dscr_stress(CompanyProfile(), FinanceConfig(), 500.0)
        # post-event EBITDA floored at 0; taxes and capex still deducted
        assert result.cfads_post_event == pytest.approx(-55.25)
        assert result.covenant_breach

    def test_no_debt_never_breaches(self):
        cfg = FinanceConfig(total_debt_millions=0)
        result = compute_dscr_stress(CompanyProfile(), cfg, 500.0)
        assert result.dscr_pre_event == 0.0
        assert not result.covenant_breach
