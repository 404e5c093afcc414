"""Route a generic check to `assert_true` or `assert_equal`.

Two entry points:

* `check(value)` / `check(left, right)`: the caller picks the form at the
  call site by passing one or two operands.
* `check_expression(source, globals)`: the form is picked by parsing the
  expression text before any of it is evaluated. A single two-operand `==`
  comparison has its operands evaluated separately so the failure message
  can show both values.
"""

from __future__ import annotations

import ast
from typing import Any, Mapping

from pukeko.assertions.deterministic import assert_equal, assert_true


def check(*operands: Any) -> None:
    if len(operands) == 1:
        assert_true(operands[0])
    elif len(operands) == 2:
        assert_equal(operands[0], operands[1])
    else:
        raise TypeError(f"check() takes 1 or 2 operands, got {len(operands)}")


def _equality_operands(tree: ast.Expression) -> tuple[ast.expr, ast.expr] | None:
    node = tree.body
    if (
        isinstance(node, ast.Compare)
        and len(node.ops) == 1
        and isinstance(node.ops[0], ast.Eq)
    ):
        return node.left, node.comparators[0]
    return None


def _evaluate(
    node: ast.expr,
    source: str,
    globals: dict[str, Any],
    locals: Mapping[str, Any] | None,
) -> Any:
    expression = ast.Expression(body=node)
    code = compile(expression, f"<check: {source}>", "eval")
    if locals is None:
        return eval(code, globals)
    # Nested scopes (generators, lambdas) resolve free names in globals only.
    return eval(code, {**globals, **locals})


def check_expression(
    source: str,
    globals: dict[str, Any],
    locals: Mapping[str, Any] | None = None,
) -> None:
    """Evaluate `source` as an assertion in the given scope.

    Typical use inside a test function is
    ``check_expression("add(1, 2) == 3", globals(), locals())``.
    """
    try:
        tree = ast.parse(source.strip(), mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Invalid check expression {source!r}: {e.msg}") from e

    operands = _equality_operands(tree)
    if operands is not None:
        left, right = operands
        assert_equal(
            _evaluate(left, source, globals, locals),
            _evaluate(right, source, globals, locals),
        )
        return
    assert_true(_evaluate(tree.body, source, globals, locals))
