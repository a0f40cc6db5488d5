from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from typing import List, Optional

import numpy as np

# Ensure project imports work when run from a source checkout
try:
    from conscalc.config import load_config
except ImportError:
    sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    from conscalc.config import load_config

from conscalc.consensus import ConsensusEngine
from conscalc.consensus.sweep import disagreement_grid, feasible_grid, summarize_grid
from conscalc.logutil import get_logger, set_level
from conscalc.presentation import FIELD_LABELS, format_value
from conscalc.visualization import plots


def _init_logger(out_dir: Optional[str], verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger('ConsCalcCLI')
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return logger
    fmt = logging.Formatter('[%(asctime)s] %(levelname)s - %(message)s')
    ch = logging.StreamHandler(stream=sys.stderr)
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    if out_dir or log_file:
        lf = log_file or os.path.join(out_dir, 'conscalc_cli.log')
        os.makedirs(os.path.dirname(lf) or '.', exist_ok=True)
        fh = logging.FileHandler(lf, encoding='utf-8')
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
        logger.debug('Log file: %s', lf)
    return logger


def _build_engine(args, cfg) -> ConsensusEngine:
    if args.max_variance is not None:
        return ConsensusEngine(max_variance=args.max_variance)
    return ConsensusEngine.from_config(cfg)


def cmd_evaluate(args, cfg, engine: ConsensusEngine) -> int:
    logger = _init_logger(out_dir=None, verbose=args.verbose, log_file=args.log_file)
    result = engine.evaluate(args.mean, args.variance)

    if args.json:
        print(result.to_payload().model_dump_json(indent=2, exclude_none=True))
    elif result.ok:
        precision = cfg.settings.display_precision
        for key, value in result.letters().items():
            print(f"  {FIELD_LABELS[key]:<30} {format_value(value, precision)}")
    else:
        print(result.error, file=sys.stderr)

    if not result.ok:
        logger.debug('Rejected: %s', result.error)
        return 1
    return 0


def cmd_sweep(args, cfg, engine: ConsensusEngine) -> int:
    start = time.time()
    out_dir = args.out_dir or cfg.paths.exports_dir
    os.makedirs(out_dir, exist_ok=True)
    logger = _init_logger(out_dir=out_dir, verbose=args.verbose, log_file=args.log_file)
    points = args.points or cfg.settings.sweep_points
    if points < 2:
        raise SystemExit(f"--points must be at least 2, got {points}")

    logger.info('Step 1/3: Evaluating %s grid with %d points per axis...',
                'feasible' if args.feasible_only else 'rectangular', points)
    if args.feasible_only:
        df = feasible_grid(points, points, engine=engine)
    else:
        df = disagreement_grid(np.linspace(1.0, 5.0, points),
                               np.linspace(0.0, args.max_plot_variance, points),
                               engine=engine)
    summary = summarize_grid(df)
    logger.info('Evaluated %d pairs (%d valid)', summary['n'], summary['n_valid'])

    base = args.name
    png = os.path.join(out_dir, f"{base}_heatmap.png")
    html = os.path.join(out_dir, f"{base}_heatmap.html")
    export_prefix = os.path.join(out_dir, f"{base}_export")

    logger.info('Step 2/3: Saving heatmaps -> %s, %s', png, html)
    title = args.title or 'Index of Disagreement (L)'
    plots.save_matplotlib_heatmap(df, png, title=title)
    plots.save_plotly_heatmap(df, html, title=title)
    logger.info('Step 3/3: Exporting CSV/Parquet/JSON -> %s*', export_prefix)
    exports = plots.export_sweep(df, export_prefix)

    logger.info('All done in %.2f seconds', time.time() - start)
    print('Summary:')
    print(json.dumps(summary, indent=2))
    print('Wrote:')
    print(f"  PNG:   {png}")
    print(f"  HTML:  {html}")
    print(f"  CSV:   {exports['csv']}")
    if exports.get('parquet'):
        print(f"  PARQUET: {exports['parquet']}")
    print(f"  JSON:  {exports['json']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="ConsCalc: Index of Disagreement for Likert items")
    p.add_argument("--config", default=None, help="Path to config YAML (defaults to config/config.yaml)")
    p.add_argument("--max-variance", type=float, default=None,
                   help="Reject variances above this value (overrides config)")
    p.add_argument("--verbose", action='store_true', help="Enable verbose logging")
    p.add_argument("--log-file", default=None, help="Optional log file path")
    sub = p.add_subparsers(dest="command", required=True)

    ev = sub.add_parser("evaluate", help="Evaluate one mean/variance pair")
    ev.add_argument("--mean", type=float, required=True, help="Mean (C) on the 1-5 scale")
    ev.add_argument("--variance", type=float, required=True, help="Variance (D)")
    ev.add_argument("--json", action='store_true', help="Print the result payload as JSON")
    ev.set_defaults(func=cmd_evaluate)

    sw = sub.add_parser("sweep", help="Evaluate a grid and write heatmaps and exports")
    sw.add_argument("--out-dir", default=None, help="Output directory (defaults to exports_dir from config)")
    sw.add_argument("--points", type=int, default=None, help="Grid points per axis (defaults to sweep_points)")
    sw.add_argument("--feasible-only", action='store_true',
                    help="Only sweep variances a discrete 1-5 response set can produce")
    sw.add_argument("--max-plot-variance", type=float, default=4.0,
                    help="Upper end of the variance axis for the rectangular grid")
    sw.add_argument("--name", default="disagreement", help="Base name of the written files")
    sw.add_argument("--title", default=None, help="Plot title")
    sw.set_defaults(func=cmd_sweep)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
        engine = _build_engine(args, cfg)
    except ValueError as e:
        raise SystemExit(f"error: {e}")
    if args.verbose:
        for name in ("conscalc.consensus.engine", "conscalc.consensus.sweep"):
            set_level(get_logger(name), logging.DEBUG)
    return args.func(args, cfg, engine)


if __name__ == "__main__":
    sys.exit(main())
