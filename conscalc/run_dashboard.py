"""Launch the ConsCalc Streamlit app.

  python -m conscalc.run_dashboard --port 8502 --headless
  conscalc-dashboard
"""
from __future__ import annotations

import argparse
import os
from typing import Any, Dict, List, Optional

DASHBOARD_SCRIPT = 'dashboard.py'


def dashboard_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), DASHBOARD_SCRIPT)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run the ConsCalc dashboard")
    p.add_argument("--port", type=int, default=None, help="Server port (Streamlit default when omitted)")
    p.add_argument("--address", default=None, help="Server address to bind")
    p.add_argument("--headless", action='store_true', help="Do not open a browser window")
    return p


def streamlit_flags(args: argparse.Namespace) -> Dict[str, Any]:
    """Map launcher options onto Streamlit flag names (section_option)."""
    flags: Dict[str, Any] = {}
    if args.port is not None:
        flags['server_port'] = args.port
    if args.address:
        flags['server_address'] = args.address
    if args.headless:
        flags['server_headless'] = True
    return flags


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    script = dashboard_path()
    if not os.path.exists(script):
        raise SystemExit(f"dashboard script not found: {script}")

    from streamlit.web import bootstrap
    flags = streamlit_flags(args)
    bootstrap.load_config_options(flag_options=flags)
    bootstrap.run(script, False, [], flag_options=flags)


if __name__ == "__main__":
    main()
