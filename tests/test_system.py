import numpy as np
import pytest
from scipy.integrate import solve_ivp

from ode_expression import OdeSystem, GlobalVar, ParseError, UndefinedVariableError


def _oscillator(with_intervals: bool) -> OdeSystem:
    interval = (-2.0, 2.0) if with_intervals else None
    system = OdeSystem()
    system.add_equation('m', '-1', interval)
    system.add_equation('x', 'integ(y, 1)', interval)
    system.add_equation('y', 'integ(m*x, 0)', interval)
    return system


class TestOdeSystem:
    def test_groups(self):
        system = _oscillator(with_intervals=False)
        assert len(system) == 3
        assert 'x' in system
        assert system.state_names == ['x', 'y']
        assert [c.name for c in system.constants()] == ['m']
        assert system['y'].is_integral

    def test_initial_state(self):
        system = _oscillator(with_intervals=False)
        np.testing.assert_array_equal(system.initial_state(), [1.0, 0.0])

    def test_derivatives_raw(self):
        system = _oscillator(with_intervals=False)
        np.testing.assert_allclose(system.derivatives(0.0, [1.0, 0.5]), [0.5, -1.0])

    def test_calibrate_only_equations_with_intervals(self):
        system = OdeSystem()
        system.add_equation('k', '2', (-4.0, 4.0))
        system.add_equation('x', 'integ(k, 0)')
        scales = system.calibrate(limit=1.0)
        assert scales == {'k': 0.25}
        assert not system['x'].is_calibrated
        assert system.constants()[0].value == 0.5

    def test_calibrate_is_not_repeated(self):
        system = _oscillator(with_intervals=True)
        assert len(system.calibrate()) == 3
        assert system.calibrate() == {}

    def test_scaled_solution_tracks_raw_solution(self):
        t_end = 3.0
        raw = _oscillator(with_intervals=False)
        raw_solution = solve_ivp(raw.derivatives, (0.0, t_end), raw.initial_state(),
                                 rtol=1e-9, atol=1e-12)

        scaled = _oscillator(with_intervals=True)
        scales = scaled.calibrate(limit=1.0)
        scaled_solution = solve_ivp(scaled.derivatives, (0.0, t_end), scaled.initial_state(),
                                    rtol=1e-9, atol=1e-12)

        assert raw_solution.success and scaled_solution.success
        np.testing.assert_allclose(scaled_solution.y[0, -1] / scales['x'], raw_solution.y[0, -1], atol=1e-6)
        np.testing.assert_allclose(scaled_solution.y[1, -1] / scales['y'], raw_solution.y[1, -1], atol=1e-6)
        np.testing.assert_allclose(raw_solution.y[0, -1], np.cos(t_end), atol=1e-6)

    def test_algebraic_equations_feed_later_equations(self):
        system = OdeSystem()
        system.add_equation('k', '-0.5')
        system.add_equation('rate', 'k*x')
        system.add_equation('x', 'integ(rate, 1)')
        solution = solve_ivp(system.derivatives, (0.0, 2.0), system.initial_state(),
                             rtol=1e-9, atol=1e-12)
        assert solution.y[0, -1] == pytest.approx(np.exp(-1.0), abs=1e-6)

    def test_time_is_bound(self):
        system = OdeSystem()
        system.add_equation('x', 'integ(cos(t), 0)')
        solution = solve_ivp(system.derivatives, (0.0, 1.0), system.initial_state(),
                             rtol=1e-9, atol=1e-12)
        assert solution.y[0, -1] == pytest.approx(np.sin(1.0), abs=1e-6)

    def test_global_vars_reach_equations(self):
        system = OdeSystem()
        system.add_equation('x', 'integ(g*2, 0)')
        np.testing.assert_allclose(system.derivatives(0.0, [0.0], [GlobalVar('g', 1.5)]), [3.0])
        with pytest.raises(UndefinedVariableError):
            system.derivatives(0.0, [0.0])

    def test_duplicate_equation(self):
        system = OdeSystem()
        system.add_equation('x', 'integ(1, 0)')
        with pytest.raises(ParseError) as excinfo:
            system.add_equation('x', 'integ(2, 0)')
        assert excinfo.value.code == "1008"

    def test_state_length_mismatch(self):
        system = _oscillator(with_intervals=False)
        with pytest.raises(ValueError):
            system.variables([1.0])

    def test_algebraic_equation_needs_no_leading_number(self):
        system = OdeSystem()
        expression = system.add_equation('rate', 'k*x')
        assert np.isnan(expression.initial_condition)
        assert 'rate' not in system.state_names
