#!/usr/bin/env python
"""Launch the Protein A elution predictor GUI.

Usage:
    python -m proa_elution.run_app [--port PORT] [--constants FILE] [--seed N]
"""

import argparse
import logging
import sys


def main():
    parser = argparse.ArgumentParser(description='Launch the Protein A elution predictor')
    parser.add_argument('--port', type=int, default=5007, help='Port to serve on')
    parser.add_argument('--constants', type=str, default=None,
                       help='Path to a molecular constants JSON file')
    parser.add_argument('--seed', type=int, default=None,
                       help='Seed for the intensity noise')
    parser.add_argument('--no-browser', action='store_true',
                       help='Do not open browser automatically')
    parser.add_argument('--log-level', type=str, default='INFO',
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Logging level')

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    try:
        import panel as pn
        pn.extension('tabulator', notifications=True)
    except ImportError:
        print("Error: Panel is required. Install with: pip install panel")
        sys.exit(1)

    from proa_elution.app import create_app

    print(f"Starting Protein A elution predictor on port {args.port}...")
    if args.constants:
        print(f"Molecular constants: {args.constants}")

    app = create_app(constants_path=args.constants, seed=args.seed)

    pn.serve(
        app.view(),
        port=args.port,
        show=not args.no_browser,
        title="Protein A Elution Predictor",
    )


if __name__ == "__main__":
    main()
