#!/usr/bin/env python3
"""
namekit CLI
===========
Command-line interface for training a name model and harvesting names.

Usage:
    namekit generate -n 20 --order 3
    namekit generate --corpus names.txt --seed 42 -o generated_names.txt
    namekit generate --start Ka -n 5
    namekit inspect --context Ca
    namekit stats --unbounded
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import IntPrompt

from namekit import __version__
from namekit.chain import DEFAULT_ORDER, SequenceModel
from namekit.corpus import Corpus
from namekit.filters import FilterPipeline
from namekit.harvest import NameHarvester, write_names
from namekit.settings import get_setting, user_path
from namekit.ui import get_ui

logger = logging.getLogger(__name__)


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}")


def configure_logging(verbose: bool = False, quiet: bool = False):
    """Route library logging through rich."""
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False,
                              rich_tracebacks=verbose)],
        force=True,
    )


def resolve_order(args):
    """Order from the command line, else app.yaml; None means unbounded."""
    if getattr(args, 'unbounded', False):
        return None
    if getattr(args, 'order', None) is not None:
        return args.order
    return get_setting("model.order", DEFAULT_ORDER)


def build_model(args):
    """Load the corpus and train a model on it."""
    seed = args.seed if getattr(args, 'seed', None) is not None else get_setting("model.seed")
    model = SequenceModel(order=resolve_order(args), seed=seed)

    shuffle = False if getattr(args, 'no_shuffle', False) else None
    corpus = Corpus.from_file(args.corpus, shuffle=shuffle, sampler=model.sampler)
    model.train(corpus.sequences())
    logger.info("Trained on %d names from %s (order=%s)", len(corpus), corpus.path, model.order)
    return model, corpus


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Harvest names (or print raw continuations of --start)."""
    count = args.count
    if args.interactive:
        args.order = IntPrompt.ask("Enter the number of characters in a chain",
                                   default=resolve_order(args) or DEFAULT_ORDER)
        args.unbounded = False
        count = IntPrompt.ask("Enter the number of names you want",
                              default=count or get_setting("harvest.count", 10))
    if count is None:
        count = get_setting("harvest.count", 10)
    if count < 0:
        out.error("--count must not be negative")
        return 1

    model, corpus = build_model(args)
    ui = get_ui(target=count, quiet=args.quiet)

    if args.show_corpus:
        ui.print_corpus(corpus.names)

    if args.start is not None:
        names = [str(model.generate(args.start)) for _ in range(count)]
        ui.print_names(names)
        return 0

    harvester = NameHarvester(model, FilterPipeline.from_settings(), known=corpus.known)
    with ui:
        result = harvester.harvest(count=count, max_attempts=args.max_attempts,
                                   on_progress=ui.update)

    ui.print_names(result.names)
    ui.print_summary(result)

    output = None if args.no_output else (args.output or get_setting("output.path"))
    if output:
        path = write_names(user_path(output), result.names)
        out.success(f"Wrote {len(result.names)} names to {path}")

    if not result.names:
        out.error("No acceptable names generated")
        return 1
    return 0


def cmd_inspect(args, out: Output):
    """Show the next-symbol distribution after a context."""
    model, _ = build_model(args)
    context = args.context or ""
    if model.find(context) is None:
        out.error(f"Context {context!r} not in model")
        return 1

    rows = model.distribution(context)
    ui = get_ui(quiet=False)
    ui.print_distribution(context, rows)
    return 0


def cmd_stats(args, out: Output):
    """Show model size statistics."""
    model, corpus = build_model(args)
    ui = get_ui(quiet=False)
    ui.print_stats({
        'corpus': str(corpus.path),
        'names': len(corpus),
        'order': 'unbounded' if model.order is None else model.order,
        'nodes': model.node_count(),
        'max depth': model.max_depth(),
        'start symbols': len(model.root.children),
    })
    return 0


# =============================================================================
# Entry point
# =============================================================================

def _add_model_args(p):
    p.add_argument('--corpus', '-c', help='Training file, one name per line (default: from app.yaml)')
    p.add_argument('--order', '-k', type=int, help='Characters of context (default: from app.yaml)')
    p.add_argument('--unbounded', '-u', action='store_true',
                   help='Use the unbounded prefix trie instead of a fixed order')
    p.add_argument('--seed', type=int, help='Random seed for reproducible output')
    p.add_argument('--no-shuffle', action='store_true', help='Train in file order')
    p.add_argument('--verbose', '-v', action='store_true', help='Debug logging')


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='namekit',
        description='namekit - Markov chain name generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 20
  %(prog)s generate --corpus names.txt --order 2 --seed 7 -o out.txt
  %(prog)s generate --start Ka -n 5
  %(prog)s inspect --context Ca
  %(prog)s stats
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    _add_model_args(p)
    p.add_argument('-n', '--count', type=int, help='Number of names (default: from app.yaml)')
    p.add_argument('--max-attempts', type=int, help='Candidates to try before giving up')
    p.add_argument('--start', '-s', help='Seed symbol or prefix; prints raw model output')
    p.add_argument('--output', '-o', help='Write accepted names to this file (default: output.path in app.yaml)')
    p.add_argument('--no-output', action='store_true', help='Do not write the names file')
    p.add_argument('--show-corpus', action='store_true', help='Print the (shuffled) training names')
    p.add_argument('--interactive', '-i', action='store_true', help='Prompt for order and count')

    # --- inspect ---
    p = subparsers.add_parser('inspect', aliases=['i'], help='Show transition probabilities')
    _add_model_args(p)
    p.add_argument('--context', '-x', default='', help='Preceding characters (default: start)')

    # --- stats ---
    p = subparsers.add_parser('stats', help='Show model statistics')
    _add_model_args(p)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'i': 'inspect',
    }
    command = cmd_map.get(args.command, args.command)

    configure_logging(verbose=getattr(args, 'verbose', False), quiet=args.quiet)
    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'inspect': cmd_inspect,
        'stats': cmd_stats,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if getattr(args, 'verbose', False):
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
