"""Command line entry point for bufrng.

Commands:
  sample  print values drawn from a generator profile
  bench   time raw word draws with a progress meter
  check   chi-square uniformity check of the bounded-integer sampler
"""
from __future__ import annotations

import argparse
import sys
import time
from typing import Callable, Dict, List, Optional

from bufrng import settings
from bufrng.common.stats import uniformity_report
from bufrng.distributions import RandomGen
from bufrng.log import info, success, error, warning, set_verbose, progress_context


def _sampler_for(kind: str, rng: RandomGen, maximum: int) -> Callable[[], object]:
    samplers: Dict[str, Callable[[], object]] = {
        'uniform': rng.uniform,
        'single': rng.uniform_single,
        'int': lambda: rng.uniform_uint64(maximum),
        'gaussian': rng.gaussian,
        'exponential': rng.exponential,
        'bool': rng.boolean,
        'byte': rng.byte,
        'bytes': lambda: rng.random_bytes(16).hex(),
    }
    if kind not in samplers:
        available = ', '.join(samplers.keys())
        raise ValueError(f"Unsupported sample kind: {kind}. Available options: {available}")
    return samplers[kind]


def cmd_sample(args: argparse.Namespace) -> int:
    rng = RandomGen.create_profile(args.profile, args.seed)
    draw = _sampler_for(args.kind, rng, args.max)
    for _ in range(args.count):
        print(draw())
    return 0


def cmd_bench(args: argparse.Namespace) -> int:
    rng = RandomGen.create_profile(args.profile, args.seed)
    chunk = max(1, args.draws // 100)
    start = time.perf_counter()
    with progress_context(total=args.draws, desc=f"{args.profile} uint32") as pbar:
        done = 0
        while done < args.draws:
            step = min(chunk, args.draws - done)
            for _ in range(step):
                rng.uint32()
            done += step
            pbar.update(step)
    elapsed = time.perf_counter() - start
    rate = args.draws / elapsed if elapsed > 0 else float('inf')
    success(f"{args.draws} draws in {elapsed:.3f}s ({rate:,.0f} words/s)")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    rng = RandomGen.create_profile(args.profile, args.seed)
    check_cfg = settings.SETTINGS.get('check', {})
    buckets: List[int] = args.buckets or list(check_cfg.get('buckets', []))
    per_bucket = args.samples_per_bucket or int(check_cfg.get('samples_per_bucket', 20))
    if not buckets:
        raise ValueError("No bucket counts given. Pass --buckets or set 'check.buckets' in config/config.json")

    failures = 0
    for count in buckets:
        report = uniformity_report(rng, count, per_bucket)
        line = (f"buckets={report['buckets']} samples={report['samples']} "
                f"chi2={report['chi_square']:.1f} df={report['df']} z={report['z']:+.2f}")
        if report['passed']:
            info(line)
        else:
            failures += 1
            warning(f"{line} outside tolerance")

    if failures:
        error(f"{failures} of {len(buckets)} uniformity checks failed")
        return 1
    success(f"All {len(buckets)} uniformity checks passed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bufrng", description="Buffered random value engine")
    ap.add_argument("--verbose", action="store_true", help="print debug log lines")
    sub = ap.add_subparsers(dest="command", required=True)

    def add_profile(p: argparse.ArgumentParser) -> None:
        p.add_argument("--profile", default="fast", choices=["fast", "secure", "local"])
        p.add_argument("--seed", type=int, default=None, help="seed (fast profile only)")

    p_sample = sub.add_parser("sample", help="print random values")
    add_profile(p_sample)
    p_sample.add_argument("--kind", default="uniform")
    p_sample.add_argument("--count", type=int, default=10)
    p_sample.add_argument("--max", type=int, default=100, help="exclusive bound for --kind int")
    p_sample.set_defaults(func=cmd_sample)

    p_bench = sub.add_parser("bench", help="measure raw word throughput")
    add_profile(p_bench)
    p_bench.add_argument("--draws", type=int, default=1_000_000)
    p_bench.set_defaults(func=cmd_bench)

    p_check = sub.add_parser("check", help="chi-square check of uniform_uint")
    add_profile(p_check)
    p_check.add_argument("--buckets", type=int, nargs="+", default=None)
    p_check.add_argument("--samples-per-bucket", type=int, default=None)
    p_check.set_defaults(func=cmd_check)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_verbose(True)
    try:
        return args.func(args)
    except (ValueError, NotImplementedError) as e:
        error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
