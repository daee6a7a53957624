"""
CLI entry point. Run as: python -m chaining --domain <name> --mode <mode>
"""

import argparse

from .core.store import KnowledgeStore
from .core.proof import print_proof
from .inference.backward import backward
from .inference.forward import forward
from .inference.iterate import iterate_backward, iterate_forward, prove_with_lemmas
from .inference.control import depth_control
from .visualization import print_store, print_results, print_trace, export_dot
from .domains import DOMAINS, get_domain


MODES = (
    "backward", "forward", "iterate-backward", "iterate-forward",
    "lemmas", "controlled",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Depth-bounded chaining over curried typed terms")
    parser.add_argument("--domain", choices=list(DOMAINS.keys()), default="modus_ponens",
                        help="Which knowledge base to load")
    parser.add_argument("--mode", choices=MODES, default="backward",
                        help="Which chainer to run")
    parser.add_argument("--depth",  type=int, default=None, help="Depth budget (domain default)")
    parser.add_argument("--rounds", type=int, default=None, help="Iterative rounds (domain default)")
    parser.add_argument("--limit",  type=int, default=50,   help="Max results to collect")
    parser.add_argument("--save",   type=str, default=None, help="Save the store to file")
    parser.add_argument("--load",   type=str, default=None, help="Load the store from file")
    parser.add_argument("--dot",    type=str, default=None, help="Export DOT graph of the first proof")
    parser.add_argument("--trace",  action="store_true",    help="Print every search event")
    parser.add_argument("--quiet",  action="store_true",    help="Less output")
    return parser


def run(args) -> list:
    """Run one chaining mode against the selected domain. Returns the results."""
    domain = get_domain(args.domain)
    depth = domain["depth"] if args.depth is None else args.depth
    rounds = domain["rounds"] if args.rounds is None else args.rounds
    options = dict(domain.get("options", {}))
    trace = print_trace if args.trace else None
    verbose = not args.quiet

    if args.load:
        store = KnowledgeStore.load(args.load)
        print(f"Loaded store from {args.load} ({len(store)} judgments)")
    else:
        store = domain["make_store"]()

    if verbose:
        print(f"Domain: {args.domain} -- {domain['description']}")
        print_store(store)

    query, source = domain["query"], domain["source"]
    if args.mode == "backward":
        results = backward(store, depth, query, trace=trace, **options)
    elif args.mode == "forward":
        results = forward(store, depth, source, trace=trace)
    elif args.mode == "iterate-backward":
        results = iterate_backward(store, depth, rounds, query,
                                   verbose=verbose, trace=trace, **options)
    elif args.mode == "iterate-forward":
        results = iterate_forward(store, depth, rounds, source,
                                  verbose=verbose, trace=trace)
    elif args.mode == "lemmas":
        results = prove_with_lemmas(store, depth, rounds, query,
                                    verbose=verbose, trace=trace, **options)
    else:
        results = depth_control(depth).run(store, query, trace=trace)

    collected = []
    try:
        for item in results:
            collected.append(item)
            if len(collected) >= args.limit:
                break
    except KeyboardInterrupt:
        print("\nInterrupted.")

    print_results(collected, title=f"{args.mode} at depth {depth}")
    if collected and verbose:
        print_proof(collected[0])
        if args.mode.startswith("iterate") or args.mode == "lemmas":
            print_store(store)

    if args.dot and collected:
        export_dot(collected[0], args.dot)

    if args.save:
        store.save(args.save)
        print(f"Store saved to {args.save}")

    return collected


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    for flag in ("depth", "rounds"):
        value = getattr(args, flag)
        if value is not None and value < 0:
            parser.error(f"--{flag} must be non-negative")
    run(args)


if __name__ == "__main__":
    main()
