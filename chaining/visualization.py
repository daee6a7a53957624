"""
Visualization and reporting utilities.
"""

from collections import Counter

from .core.store import KnowledgeStore
from .core.terms import format_term, canonical
from .core.proof import proof_of, proof_tree


def print_store(store: KnowledgeStore):
    """Print every judgment in the store."""
    print(f"\n{'='*60}")
    print(f"Knowledge store {store.name!r} ({len(store)}):")
    for item in store:
        print(f"  {format_term(item)}")
    print(f"{'='*60}")


def print_results(results: list, title: str = "Results"):
    """Print results with their multiplicity (derivation paths)."""
    counts = Counter(canonical(r) for r in results)
    print(f"\n{'='*60}")
    print(f"{title}: {len(results)} ({len(counts)} distinct)")
    print(f"{'='*60}")
    if not results:
        print("  No proof found.")
        return
    for item, n in counts.items():
        times = f"  x{n}" if n > 1 else ""
        print(f"  {format_term(item)}{times}")


def print_trace(event, depth, term):
    """A trace callback that prints every search event."""
    marker = {"goal": "?", "match": "+", "expand": ">", "prune": "x"}.get(event, "-")
    print(f"  [{depth}] {marker} {format_term(term)}")


class TraceCounter:
    """A trace callback that counts events. counter.counts["expand"] etc."""

    def __init__(self):
        self.counts = Counter()

    def __call__(self, event, depth, term):
        self.counts[event] += 1

    @property
    def total(self):
        return sum(self.counts.values())


def export_dot(item, path="proof.dot"):
    """Export a judgment's proof tree as a DOT file for Graphviz."""
    counter = [0]

    def node_id():
        counter[0] += 1
        return f"n{counter[0]}"

    with open(path, "w") as f:
        f.write("digraph proof {\n")
        f.write("  rankdir=BT;\n")
        f.write("  node [shape=box, style=rounded];\n")

        def write(tree):
            head, children = tree
            nid = node_id()
            label = str(head).replace('"', '\\"')
            color = "lightgray" if not children else "lightblue"
            f.write(f'  {nid} [label="{label}", fillcolor={color}, style=filled];\n')
            for child in children:
                cid = write(child)
                f.write(f"  {cid} -> {nid};\n")
            return nid

        root = write(proof_tree(proof_of(item)))
        theorem = format_term(item[2]).replace('"', '\\"')
        f.write(f'  goal [label="{theorem}", shape=plaintext];\n')
        f.write(f"  {root} -> goal;\n")
        f.write("}\n")
    print(f"Graph exported to {path}")
