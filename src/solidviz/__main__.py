#!/usr/bin/env python3
"""
Command line front end for solidviz.

Usage:
    python -m solidviz check FORMULA [--orientation x|y]
    python -m solidviz eval FORMULA VALUE [VALUE ...] [--orientation x|y]
    python -m solidviz sample [options] [--output FILE.json]
    python -m solidviz sections [options] [--output FILE.json]
    python -m solidviz revolve [options] [--output FILE.stl|FILE.json]

Geometry commands start from the defaults (or ``--config FILE``) and
apply any of ``--f1``, ``--f2``, ``--orientation``, ``--start``,
``--end``, ``--step``, ``--profile`` and ``--axis`` on top.

Examples:
    # Report problems in a formula
    python -m solidviz check "x^2 + abs(x)"

    # Tabulate a formula
    python -m solidviz eval "sqrt(y)" 0 1 4 --orientation y

    # Semicircular cross-sections between y = x + 6 and y = x^2
    python -m solidviz sections --profile semicircle -o sections.json

    # Revolve the same region about y = -1 and export STL
    python -m solidviz revolve --axis -1 -o solid.stl
"""

import argparse
import logging
import sys
from pathlib import Path

from solidviz.config import ConfigError, SceneConfig, load_config
from solidviz.logging_config import parse_level, setup_logging

logger = logging.getLogger(__name__)


def build_config(args) -> SceneConfig:
    """Load ``--config`` (if any) and apply the command line overrides."""
    config = load_config(args.config) if args.config else SceneConfig()
    return config.replace(
        function1=args.f1,
        function2=args.f2,
        orientation=args.orientation,
        interval_start=args.start,
        interval_end=args.end,
        step=args.step,
        profile=args.profile,
        rotation_axis=args.axis,
    )


def write_json_output(scene, output) -> None:
    from solidviz.io import write_scene_json

    write_scene_json(scene, output, indent=2)
    print(f"Wrote {output}")


def cmd_check(args):
    """Print every diagnostic for a formula."""
    from solidviz.expr import check

    diagnostics = check(args.formula, args.orientation)
    if diagnostics:
        print(f"{len(diagnostics)} problem(s) in {args.formula!r}:")
        for diag in diagnostics:
            print(diag.format())
        return 1

    print(f"OK: {args.formula}")
    return 0


def cmd_eval(args):
    """Evaluate a formula at one or more values."""
    from solidviz.expr import FormulaError, compile_formula

    try:
        formula = compile_formula(args.formula, args.orientation)
    except FormulaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for value in args.values:
        print(f"{formula.variable} = {value!r}: {formula(value)!r}")
    return 0


def cmd_sample(args, config: SceneConfig):
    """Sample both curves over the configured domain."""
    from solidviz.scene import SolidScene

    scene = SolidScene(config)
    graphs = scene.graph()
    print(f"curve 1 ({config.function1}): {len(graphs.curve1)} points")
    print(f"curve 2 ({config.function2}): {len(graphs.curve2)} points")
    if args.output:
        write_json_output(scene, args.output)
    return 0 if len(graphs.curve1) and len(graphs.curve2) else 1


def cmd_sections(args, config: SceneConfig):
    """Build cross-sections between the two curves."""
    from solidviz.scene import SolidScene

    scene = SolidScene(config)
    scene.graph()
    polygons = scene.graph_cross_sections()
    print(f"{len(polygons)} {config.profile.value} cross-section(s) over "
          f"[{config.interval_start:g}, {config.interval_end:g}) step {config.step:g}")
    if args.output:
        write_json_output(scene, args.output)
    return 0 if polygons else 1


def cmd_revolve(args, config: SceneConfig):
    """Revolve the region between the two curves and optionally export it."""
    from solidviz.io import write_stl
    from solidviz.scene import SolidScene

    scene = SolidScene(config)
    scene.graph()
    solid = scene.show_rotation()
    if solid.is_empty():
        print("Error: nothing to revolve", file=sys.stderr)
        return 1

    rows, cols = solid.mesh1.shape
    print(f"revolution grid {rows}x{cols}: {len(solid.side_quads)} side quads, "
          f"{len(solid.cap_quads)} cap quads")

    if args.output:
        suffix = Path(args.output).suffix.lower()
        if suffix == '.stl':
            count = write_stl(solid, args.output, binary=not args.ascii)
            print(f"Wrote {count} triangles to {args.output}")
        elif suffix == '.json':
            write_json_output(scene, args.output)
        else:
            print(f"Error: unsupported output format: {suffix or args.output}", file=sys.stderr)
            return 1
    return 0


def add_scene_options(parser):
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='YAML or JSON scene configuration')
    parser.add_argument('--f1', help='first boundary formula')
    parser.add_argument('--f2', help='second boundary formula')
    parser.add_argument('--orientation', choices=['x', 'y'],
                        help='independent variable')
    parser.add_argument('--start', type=float, help='interval start')
    parser.add_argument('--end', type=float, help='interval end')
    parser.add_argument('--step', type=float, help='cross-section spacing')
    parser.add_argument('--profile', choices=['square', 'triangle', 'semicircle'],
                        help='cross-section shape')
    parser.add_argument('--axis', type=float, metavar='VALUE',
                        help='rotation axis position on the dependent axis')
    parser.add_argument('-o', '--output', metavar='FILE',
                        help='output file')


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m solidviz',
        description='Cross-section and revolution solids between two curves',
    )
    parser.add_argument('--log-level', default='warning',
                        help='logging level (debug, info, warning, error)')
    parser.add_argument('--log-file', metavar='FILE', help='also log to FILE')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # check command
    check_parser = subparsers.add_parser('check', help='Report problems in a formula')
    check_parser.add_argument('formula')
    check_parser.add_argument('--orientation', choices=['x', 'y'], default='x')

    # eval command
    eval_parser = subparsers.add_parser('eval', help='Evaluate a formula')
    eval_parser.add_argument('formula')
    eval_parser.add_argument('values', nargs='+', type=float, metavar='VALUE')
    eval_parser.add_argument('--orientation', choices=['x', 'y'], default='x')

    # geometry commands
    sample_parser = subparsers.add_parser('sample', help='Sample both curves')
    add_scene_options(sample_parser)

    sections_parser = subparsers.add_parser('sections', help='Build cross-sections')
    add_scene_options(sections_parser)

    revolve_parser = subparsers.add_parser('revolve', help='Build a solid of revolution')
    add_scene_options(revolve_parser)
    revolve_parser.add_argument('--ascii', action='store_true',
                                help='write ASCII rather than binary STL')

    args = parser.parse_args(argv)

    try:
        setup_logging(parse_level(args.log_level), args.log_file)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.action == 'check':
        return cmd_check(args)
    elif args.action == 'eval':
        return cmd_eval(args)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.debug("running %s with %s", args.action, config)

    if args.action == 'sample':
        return cmd_sample(args, config)
    elif args.action == 'sections':
        return cmd_sections(args, config)
    elif args.action == 'revolve':
        return cmd_revolve(args, config)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
