# scripts/bench_fast_vs_strided.py
"""
Microbench: contiguous fast path vs strided index-generator path.

What it measures
----------------
- Per-op latency of the layout-dispatched Tensor operations (`data`,
  `unary_map`, `binary_map`, `zip`, `zip_array`) and of `reduce`, once with
  the fast path enabled and once with it disabled through `config_context`.
- Uses warmup iterations (not recorded), then repeats with median/p95.

Notes
-----
- Inputs are built once and reused; outputs are created each iteration.
- `--sanity` runs every op once per mode and checks the results are equal,
  which is the contract between the two paths.

Example
-------
python -O scripts/bench_fast_vs_strided.py --ops data unary_map zip \
    --shape 64 64 --warmup 5 --repeats 20 --sanity
"""

from __future__ import annotations

import argparse
import math
import statistics
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

import numpy as np

import os
import sys

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from venum import Tensor, config_context  # noqa: E402


# ----------------------------
# Stats helpers
# ----------------------------
def _median(xs: Sequence[float]) -> float:
    return statistics.median(xs) if xs else float("nan")


def _p95(xs: Sequence[float]) -> float:
    if not xs:
        return float("nan")
    ys = sorted(xs)
    k = int(math.ceil(0.95 * len(ys))) - 1
    k = max(0, min(k, len(ys) - 1))
    return ys[k]


def _fmt_ms(sec: float) -> str:
    return f"{sec * 1e3:10.3f} ms"


@dataclass
class OpResult:
    name: str
    fast_med: float
    fast_p95: float
    strided_med: float
    strided_p95: float


# ----------------------------
# Bench core
# ----------------------------
def _time_op(fn: Callable[[], object], *, warmup: int, repeats: int) -> List[float]:
    for _ in range(warmup):
        fn()

    times: List[float] = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def _build_ops(a: Tensor, b: Tensor, values: List[float], alpha: float) -> Dict[str, Callable[[], object]]:
    last = a.ndims() - 1
    return {
        "data": lambda: a.data(),
        "unary_map": lambda: a.unary_map(lambda x: -x),
        "binary_map": lambda: a.binary_map(alpha, lambda x, y: x * y),
        "zip": lambda: a.zip(b, lambda x, y: x + y),
        "zip_array": lambda: a.zip_array(values, lambda x, y: x - y),
        "reduce": lambda: a.reduce([last], lambda v: sum(v.data().tolist())),
    }


def _run(op: Callable[[], object], fast_path: bool) -> object:
    with config_context(fast_path=fast_path):
        return op()


def _sanity_check(name: str, fast: object, strided: object) -> None:
    if isinstance(fast, Tensor):
        equal = fast == strided
    else:
        equal = np.array_equal(fast, strided)
    if not equal:
        raise AssertionError(f"[sanity] {name} differs between fast and strided paths")


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--shape",
        nargs="+",
        type=int,
        default=[64, 64],
        help="Tensor sizes, e.g. --shape 64 64",
    )
    ap.add_argument("--warmup", type=int, default=5)
    ap.add_argument("--repeats", type=int, default=20)
    ap.add_argument(
        "--ops",
        nargs="*",
        default=["data", "unary_map", "binary_map", "zip", "zip_array", "reduce"],
    )
    ap.add_argument("--alpha", type=float, default=0.125)
    ap.add_argument(
        "--sanity",
        action="store_true",
        help="Check that both paths produce equal results, once per op",
    )
    args = ap.parse_args()

    sizes = tuple(int(x) for x in args.shape)

    print("=" * 96)
    print(
        f"Fast vs strided bench | sizes={sizes} warmup={args.warmup} repeats={args.repeats}"
    )
    print("=" * 96)

    rng = np.random.default_rng(0)
    a = Tensor(rng.standard_normal(size=sizes), sizes)
    b = Tensor(rng.standard_normal(size=sizes), sizes)
    values = rng.standard_normal(size=a.numel()).tolist()

    ops = _build_ops(a, b, values, float(args.alpha))
    selected = [op for op in args.ops if op in ops]
    if not selected:
        raise SystemExit(f"No valid ops selected. Choose from: {' '.join(ops)}")

    results: List[OpResult] = []
    for name in selected:
        op = ops[name]

        fast_times = _time_op(lambda: _run(op, True), warmup=args.warmup, repeats=args.repeats)
        strided_times = _time_op(
            lambda: _run(op, False), warmup=args.warmup, repeats=args.repeats
        )

        if args.sanity:
            _sanity_check(name, _run(op, True), _run(op, False))

        results.append(
            OpResult(
                name=name,
                fast_med=_median(fast_times),
                fast_p95=_p95(fast_times),
                strided_med=_median(strided_times),
                strided_p95=_p95(strided_times),
            )
        )

    print("\nResults (median / p95):")
    print("-" * 96)
    print(
        f"{'op':12s} | {'fast_med':>13s} {'fast_p95':>13s} | "
        f"{'strided_med':>13s} {'strided_p95':>13s} | {'ratio':>8s}"
    )
    print("-" * 96)
    for r in results:
        ratio = r.strided_med / r.fast_med if r.fast_med > 0 else float("nan")
        print(
            f"{r.name:12s} | {_fmt_ms(r.fast_med)} {_fmt_ms(r.fast_p95)} | "
            f"{_fmt_ms(r.strided_med)} {_fmt_ms(r.strided_p95)} | {ratio:8.2f}x"
        )
    print("-" * 96)


if __name__ == "__main__":
    main()
