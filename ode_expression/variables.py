"""Name/value/scale triples bound into expression evaluation."""

from dataclasses import dataclass
from typing import Dict, Iterable

from . import config


@dataclass
class Var:
  """A simulation constant, a live state variable or an imported global."""
  name: str
  value: float
  scale: float = config.NEUTRAL_SCALE

  def unscaled(self) -> float:
    """Value relative to an unscaled frame; neutral-scale variables pass through."""
    if self.scale == config.NEUTRAL_SCALE:
      return self.value
    return self.value / self.scale


@dataclass
class GlobalVar:
  """Entry of the process-wide shared table; never owned by an Expression."""
  name: str
  value: float
  scale: float = config.NEUTRAL_SCALE

  def to_var(self) -> Var:
    return Var(self.name, self.value, self.scale)


def merge_bindings(constants: Iterable[Var] = (),
                   variables: Iterable[Var] = (),
                   global_vars: Iterable[GlobalVar] = ()) -> Dict[str, Var]:
  """Merge constants, then variables, then globals; the first name seen wins."""
  merged: Dict[str, Var] = {}
  for v in constants:
    merged.setdefault(v.name, v)
  for v in variables:
    merged.setdefault(v.name, v)
  for g in global_vars:
    if g.name not in merged:
      merged[g.name] = g.to_var()
  return merged
