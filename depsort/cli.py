"""depsort CLI entry point."""
import argparse
import json
import logging
import sys

import yaml

from depsort.core.config import OUTPUT_FORMATS, load_config
from depsort.core.emitter import render_json, render_text
from depsort.core.loader import GraphFormatError, load_graph
from depsort.core.logging import setup_logging, get_run_id, timed
from depsort.core.resolver import CycleError, resolve


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='depsort - order items so that every prerequisite comes first')
    parser.add_argument('graph', help='Path to a JSON or YAML graph file')
    parser.add_argument('--config', '-c', help='Path to YAML config file')
    parser.add_argument('--root', '-r', action='append', dest='roots', metavar='NAME',
                        help='Resolve only what NAME needs (repeatable, overrides config)')
    parser.add_argument('--output', '-o', choices=OUTPUT_FORMATS,
                        help='Output format (overrides config)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Verbosity: -v=INFO, -vv=DEBUG')
    parser.add_argument('--json-logs', action='store_true',
                        help='Output logs in JSON format')
    return parser.parse_args(argv)


@timed
def run(graph_path, config):
    graph = load_graph(graph_path)
    logging.info(f"Loaded {len(graph)} node(s) from {graph_path}")
    return resolve(graph, config.resolve_roots())


def main(argv=None):
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"depsort: {e}", file=sys.stderr)
        return 1

    # CLI args override config
    if args.roots:
        config.roots = args.roots
    if args.output:
        config.output = args.output
    if args.verbose:
        config.verbosity = args.verbose
    if args.json_logs:
        config.json_logs = True

    setup_logging(config.verbosity, config.json_logs)
    logging.info(f"depsort run_id={get_run_id()} graph={args.graph}")

    try:
        order = run(args.graph, config)
    except CycleError as e:
        logging.error(str(e), extra={'cycle': e.cycle})
        return 1
    except (OSError, UnicodeDecodeError, GraphFormatError, json.JSONDecodeError,
            yaml.YAMLError) as e:
        logging.error(f"Cannot load graph: {e}")
        return 1

    rendered = render_json(order) if config.output == 'json' else render_text(order)
    if rendered:
        print(rendered)
    return 0


if __name__ == '__main__':
    sys.exit(main())
