import math
import numba
from enum import IntEnum

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  # Unary ops
  SIN = 4
  COS = 5

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV}
UNARY_OP_MAP = {'sin': OpType.SIN, 'cos': OpType.COS}

# Plain ints so the jitted kernels compare against compile-time constants
_ADD = int(OpType.ADD)
_SUB = int(OpType.SUB)
_MUL = int(OpType.MUL)
_DIV = int(OpType.DIV)
_SIN = int(OpType.SIN)
_COS = int(OpType.COS)

@numba.njit(cache=True)
def evaluate_binary_op(left_val, right_val, op_code):
  # Callers reject zero divisors and unknown codes before dispatching here
  if op_code == _ADD:
    return left_val + right_val
  elif op_code == _SUB:
    return left_val - right_val
  elif op_code == _MUL:
    return left_val * right_val
  elif op_code == _DIV:
    return left_val / right_val
  return math.nan

@numba.njit(cache=True)
def evaluate_unary_op(operand_val, op_code):
  if op_code == _SIN:
    return math.sin(operand_val)
  elif op_code == _COS:
    return math.cos(operand_val)
  return math.nan
