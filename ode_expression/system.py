"""
ODE System Adapter

Groups the equations of one simulated system and exposes them to an external
integrator as a derivative callback. Reading the system description and
stepping the integration are left to the host; ``derivatives`` has the
``fun(t, y)`` signature expected by ``scipy.integrate.solve_ivp``.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from . import config
from .errors import ParseError, message_for
from .expression_tree import Expression
from .logging_system import get_logger, log_info, LogLevel
from .variables import Var, GlobalVar

TIME_VARIABLE = 't'


@dataclass
class Equation:
    """One named equation with its optional expected value interval"""
    name: str
    expression: Expression
    interval: Optional[Tuple[float, float]] = None


class OdeSystem:
    """
    Ordered set of equations forming one ODE system.

    Equations fall in three groups:
      * integral equations (``integ(...)``): state variables to integrate
      * literal equations (a bare number): constants
      * any other bare expression: algebraic outputs, evaluated in
        declaration order and visible to the equations declared after them

    Integral and algebraic equations see constants first, then state, then
    algebraic outputs, then globals, then the time ``t``.
    """

    def __init__(self):
        self._equations: Dict[str, Equation] = {}

    def add_equation(self, name: str, text: str,
                     interval: Optional[Tuple[float, float]] = None) -> Expression:
        """
        Parse ``text`` and register it under ``name``.

        Algebraic equations have no initial condition, so bare text is not
        required to start with a number here.
        """
        if name in self._equations:
            raise ParseError(message_for("1008", name), code="1008", expression=text)
        expression = Expression.parse(text, require_initial=False)
        self._equations[name] = Equation(name, expression, interval)
        log_info(f"registered {name} = {text}", LogLevel.MODERATE)
        return expression

    def __len__(self) -> int:
        return len(self._equations)

    def __contains__(self, name: str) -> bool:
        return name in self._equations

    def __getitem__(self, name: str) -> Expression:
        return self._equations[name].expression

    @property
    def state_names(self) -> List[str]:
        return [eq.name for eq in self._equations.values() if eq.expression.is_integral]

    def _constant_equations(self) -> List[Equation]:
        return [eq for eq in self._equations.values()
                if not eq.expression.is_integral and eq.expression.is_literal]

    def _algebraic_equations(self) -> List[Equation]:
        return [eq for eq in self._equations.values()
                if not eq.expression.is_integral and not eq.expression.is_literal]

    def _integral_equations(self) -> List[Equation]:
        return [eq for eq in self._equations.values() if eq.expression.is_integral]

    def calibrate(self, limit: Optional[float] = None) -> Dict[str, float]:
        """Calibrate every equation that carries an interval; returns the scales."""
        scales = {}
        for eq in self._equations.values():
            if eq.interval is None or eq.expression.is_calibrated:
                continue
            scales[eq.name] = eq.expression.calibrate(eq.interval, limit=limit)
        get_logger().calibration_summary(scales)
        return scales

    def initial_state(self) -> np.ndarray:
        """Initial conditions of the state variables (scaled where calibrated)"""
        return np.array([eq.expression.initial_condition for eq in self._integral_equations()],
                        dtype=np.float64)

    def constants(self) -> List[Var]:
        return [Var(eq.name, eq.expression.initial_condition, eq.expression.scale)
                for eq in self._constant_equations()]

    def variables(self, state: Sequence[float]) -> List[Var]:
        integrals = self._integral_equations()
        if len(state) != len(integrals):
            raise ValueError(f"Expected {len(integrals)} state values, got {len(state)}")
        return [Var(eq.name, float(value), eq.expression.scale)
                for eq, value in zip(integrals, state)]

    def algebraic(self, constants: List[Var], variables: List[Var],
                  global_vars: Iterable[GlobalVar] = ()) -> List[Var]:
        """Evaluate algebraic equations in declaration order."""
        outputs: List[Var] = []
        for eq in self._algebraic_equations():
            value = eq.expression.evaluate(constants, variables + outputs, global_vars)
            outputs.append(Var(eq.name, value, eq.expression.scale))
        return outputs

    def derivatives(self, t: float, state: Sequence[float],
                    global_vars: Iterable[GlobalVar] = ()) -> np.ndarray:
        """Derivative of every state variable at time ``t``"""
        global_vars = list(global_vars) + [GlobalVar(TIME_VARIABLE, float(t), config.NEUTRAL_SCALE)]
        constants = self.constants()
        variables = self.variables(state)
        variables = variables + self.algebraic(constants, variables, global_vars)
        return np.array([eq.expression.evaluate(constants, variables, global_vars)
                         for eq in self._integral_equations()], dtype=np.float64)

    def __repr__(self) -> str:
        lines = [f"{eq.name} = {eq.expression.text}" for eq in self._equations.values()]
        return "OdeSystem(\n  " + "\n  ".join(lines) + "\n)"
